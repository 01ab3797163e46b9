"""
Output handling for the detection bridge.

Responsibility:
    Route converted Detection2DArray messages to configured output sinks:
    annotated debug images, JSON, or CSV. Supports multiple orthogonal
    outputs simultaneously.

Non-goals:
    - No conversion logic.
    - No input acquisition.
    - No publishing to a middleware transport.
"""

import logging
from pathlib import Path
from typing import List, Optional, Set

import cv2
import numpy as np

from detection_bridge.config import AppConfig, get_project_root, parse_modes
from detection_bridge.messages import Detection2DArray
from detection_bridge.serializer import save_csv, save_json
from detection_bridge.visualizer import draw_detections

logger = logging.getLogger(__name__)


class OutputHandler:
    """Routes converted messages to configured output sinks.

    Supports orthogonal outputs - multiple modes can be active simultaneously:
        - 'save_image': Write annotated frames to files (when a frame is given).
        - 'save_json': Accumulate messages, write JSON on finalize.
        - 'save_csv': Accumulate messages, write CSV on finalize.

    Usage:
        handler = OutputHandler(config)
        handler.process(index, message, frame)
        ...
        handler.finalize()  # Flush any buffered output
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize the output handler.

        Args:
            config: Application configuration (output mode, paths, vis params).
        """
        self._config = config
        self._modes: Set[str] = parse_modes(config.output.mode)

        # Buffer for serialization modes
        self._messages: List[Detection2DArray] = []

        save_path = Path(config.output.save_path)
        if not save_path.is_absolute():
            save_path = get_project_root() / save_path
        self._save_path = save_path
        self._save_path.mkdir(parents=True, exist_ok=True)

        logger.info("OutputHandler initialized: modes=%s, save_path=%s",
                    self._modes, self._save_path)

    @property
    def save_path(self) -> Path:
        return self._save_path

    def process(
        self,
        index: int,
        message: Detection2DArray,
        frame: Optional[np.ndarray] = None,
    ) -> None:
        """Process a single frame's message through the output pipeline.

        Args:
            index: Frame index, used to name image files.
            message: Converted detections for the frame.
            frame: Source BGR frame, if available.
        """
        if "save_image" in self._modes:
            if frame is None:
                logger.debug("No frame for index %d, skipping image output.", index)
            else:
                self._handle_save_image(index, message, frame)

        if "save_json" in self._modes or "save_csv" in self._modes:
            self._messages.append(message)

    def _handle_save_image(
        self,
        index: int,
        message: Detection2DArray,
        frame: np.ndarray,
    ) -> None:
        """Save annotated frame as an image file."""
        annotated = draw_detections(frame, message, self._config.visualization)
        output_file = self._save_path / f"frame_{index:06d}.jpg"
        if not cv2.imwrite(str(output_file), annotated):
            logger.warning("Failed to write annotated frame %d to %s", index, output_file)
            return
        logger.debug("Saved frame %d to %s", index, output_file)

    def finalize(self) -> None:
        """Flush buffered output.

        Must be called after all frames have been processed.
        """
        if "save_json" in self._modes:
            save_json(self._messages, str(self._save_path / "detections.json"))

        if "save_csv" in self._modes:
            save_csv(self._messages, str(self._save_path / "detections.csv"))

        self._messages.clear()
        logger.info("OutputHandler finalized.")
