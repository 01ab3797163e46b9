"""
Input handling for the detection bridge.

Responsibility:
    Read recorded detector output from a JSON file and provide a uniform
    iterator of FrameRecord objects, one per frame.

Input schema:
    {
        "image_width": 640,              # optional, overrides config
        "image_height": 480,             # optional, overrides config
        "frame_id": "camera_link",       # optional, overrides config
        "class_names": ["person", ...],  # optional, overrides config
        "frames": [
            {
                "index": 0,
                "stamp": {"sec": 1, "nanosec": 0},   # optional
                "image": "frames/000000.jpg",        # optional
                "detections": [{"bbox": {...}, "confidence": ..., ...}],
                "raw": [[x, y, w, h, confidence, class_id], ...]
            }
        ]
    }

Non-goals:
    - No conversion to messages and no output writing.
    - No streaming or live detector connection.

Robustness:
    - Validates the file at initialization time.
    - Logs and skips malformed frames (never crashes the pipeline).
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, List, Optional

from detection_bridge.config import ConverterConfig, DetectionConfig
from detection_bridge.detection import DetectionResult
from detection_bridge.messages import Time
from detection_bridge.postprocessor import parse_detections

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameRecord:
    """Detector output for a single frame.

    Attributes:
        index: 0-based frame index.
        stamp: Capture time, or None when the recording has none.
        image_path: Path to the source image, if recorded.
        detections: Detections in detector order.
    """

    index: int
    stamp: Optional[Time] = None
    image_path: Optional[str] = None
    detections: List[DetectionResult] = field(default_factory=list)


class InputHandler:
    """Frame iterator over a recorded detections file.

    Usage:
        handler = InputHandler("run.json", config.converter, config.detection)
        for record in handler:
            # convert record.detections
    """

    def __init__(
        self,
        source: str,
        converter: Optional[ConverterConfig] = None,
        detection: Optional[DetectionConfig] = None,
    ) -> None:
        """Load and validate the detections file.

        Args:
            source: Path to the JSON detections file.
            converter: Conversion defaults, overridden by file-level values.
            detection: Raw-row parsing parameters; file-level class names
                       take precedence.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid JSON or has no frames list.
        """
        source_str = str(source).strip()
        if not os.path.isfile(source_str):
            raise FileNotFoundError(
                f"Input source not found: '{source_str}'. "
                f"Provide the path to a JSON detections file."
            )

        try:
            with open(source_str, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Input file is not valid JSON: '{source_str}': {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("frames"), list):
            raise ValueError(
                f"Input file '{source_str}' must be a JSON object with a 'frames' list."
            )

        self._source = source_str
        self._frames = payload["frames"]

        converter = converter or ConverterConfig()
        overrides = {}
        if "frame_id" in payload:
            overrides["frame_id"] = str(payload["frame_id"])
        if "image_width" in payload:
            overrides["image_width"] = int(payload["image_width"])
        if "image_height" in payload:
            overrides["image_height"] = int(payload["image_height"])
        self._converter = replace(converter, **overrides)

        detection = detection or DetectionConfig()
        if "class_names" in payload:
            detection = replace(
                detection, class_names=tuple(str(n) for n in payload["class_names"])
            )
        self._detection = detection

        logger.info(
            "InputHandler initialized: source=%s, frames=%d",
            source_str, len(self._frames),
        )

    @property
    def converter(self) -> ConverterConfig:
        """Effective conversion parameters after file-level overrides."""
        return self._converter

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[FrameRecord]:
        """Yield one FrameRecord per well-formed frame entry.

        Malformed entries are logged and skipped.
        """
        for position, entry in enumerate(self._frames):
            try:
                yield self._parse_frame(position, entry)
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                logger.warning(
                    "Skipping malformed frame at position %d in %s: %s",
                    position, self._source, e,
                )

    def _parse_frame(self, position: int, entry: dict) -> FrameRecord:
        if not isinstance(entry, dict):
            raise TypeError(f"frame entry must be an object, got {type(entry).__name__}")

        detections = [DetectionResult.from_dict(d) for d in entry.get("detections", [])]

        if "raw" in entry:
            detections.extend(parse_detections(
                entry["raw"],
                class_names=self._detection.class_names,
                confidence_threshold=self._detection.confidence_threshold,
            ))

        stamp = None
        if "stamp" in entry:
            stamp = Time(
                sec=int(entry["stamp"]["sec"]),
                nanosec=int(entry["stamp"].get("nanosec", 0)),
            )

        image_path = entry.get("image")
        if image_path is not None:
            image = Path(image_path)
            if not image.is_absolute():
                image = Path(self._source).parent / image
            image_path = str(image)

        return FrameRecord(
            index=int(entry.get("index", position)),
            stamp=stamp,
            image_path=image_path,
            detections=detections,
        )
