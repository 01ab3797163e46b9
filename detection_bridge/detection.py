"""
Detector output records.

This module defines DetectionResult, the raw per-object record produced
by an upstream detector and consumed by the converter. Boxes use the
detector's native top-left corner plus width/height layout.

Non-goals:
    - No validation (out-of-range confidence or negative sizes pass through).
    - No coordinate transformation (that belongs in converter).
"""

from dataclasses import dataclass, field
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box in pixel units.

    Attributes:
        x: Top-left x coordinate.
        y: Top-left y coordinate.
        width: Box width.
        height: Box height.
    """

    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0

    def to_dict(self) -> dict:
        """Return a plain dict suitable for JSON serialization."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """A single detected object as reported by the detector.

    Attributes:
        bbox: Top-left anchored bounding box.
        confidence: Detection confidence, nominally in [0.0, 1.0].
        class_id: Numeric class label.
        class_name: Human-readable class label. May be empty.
    """

    bbox: BoundingBox = field(default_factory=BoundingBox)
    confidence: float = 0.0
    class_id: int = 0
    class_name: str = ""

    @classmethod
    def from_dict(cls, raw: dict) -> "DetectionResult":
        """Build a DetectionResult from its dict form.

        Raises:
            KeyError: If 'bbox' or one of its coordinates is missing.
            TypeError, ValueError: If a value cannot be converted.
        """
        box = raw["bbox"]
        return cls(
            bbox=BoundingBox(
                x=float(box["x"]),
                y=float(box["y"]),
                width=float(box["width"]),
                height=float(box["height"]),
            ),
            confidence=float(raw.get("confidence", 0.0)),
            class_id=int(raw.get("class_id", 0)),
            class_name=str(raw.get("class_name", "")),
        )

    def to_dict(self) -> dict:
        """Return a plain dict suitable for JSON serialization."""
        return {
            "bbox": self.bbox.to_dict(),
            "confidence": self.confidence,
            "class_id": self.class_id,
            "class_name": self.class_name,
        }
