"""
2D detection message records.

Plain-Python mirrors of the std_msgs / vision_msgs types a downstream
middleware layer publishes: Header, BoundingBox2D, ObjectHypothesisWithPose,
Detection2D and Detection2DArray. Field names follow the message schema so
a transport adapter can copy them across one-to-one.

Non-goals:
    - No publishing, transport, or wire encoding.
    - No covariance or 3D pose data.
"""

import time
from dataclasses import dataclass, field
from typing import List

_NSEC_PER_SEC = 1_000_000_000


@dataclass(frozen=True, slots=True)
class Time:
    """Timestamp split into whole seconds and nanoseconds."""

    sec: int = 0
    nanosec: int = 0

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> "Time":
        sec, nanosec = divmod(int(nanoseconds), _NSEC_PER_SEC)
        return cls(sec=sec, nanosec=nanosec)

    def to_nanoseconds(self) -> int:
        return self.sec * _NSEC_PER_SEC + self.nanosec

    def to_dict(self) -> dict:
        return {"sec": self.sec, "nanosec": self.nanosec}


@dataclass(frozen=True, slots=True)
class Header:
    """Timestamp and reference frame attached to sensor-derived data.

    The converter never interprets these fields; they are copied into
    every message it builds.
    """

    stamp: Time = field(default_factory=Time)
    frame_id: str = ""

    @classmethod
    def now(cls, frame_id: str) -> "Header":
        """Build a header stamped with the current wall-clock time."""
        return cls(stamp=Time.from_nanoseconds(time.time_ns()), frame_id=frame_id)

    def copy(self) -> "Header":
        """Return a field-for-field copy of this header."""
        return Header(
            stamp=Time(sec=self.stamp.sec, nanosec=self.stamp.nanosec),
            frame_id=self.frame_id,
        )

    def to_dict(self) -> dict:
        return {"stamp": self.stamp.to_dict(), "frame_id": self.frame_id}


@dataclass(frozen=True, slots=True)
class Point2D:
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class Pose2D:
    """Planar pose: a position and a rotation in radians."""

    position: Point2D = field(default_factory=Point2D)
    theta: float = 0.0

    @property
    def x(self) -> float:
        """Shorthand for position.x."""
        return self.position.x

    @property
    def y(self) -> float:
        """Shorthand for position.y."""
        return self.position.y

    def to_dict(self) -> dict:
        return {"position": self.position.to_dict(), "theta": self.theta}


@dataclass(frozen=True, slots=True)
class BoundingBox2D:
    """Center-anchored box in pixel coordinates.

    Attributes:
        center: Box centroid.
        size_x: Box width.
        size_y: Box height.
    """

    center: Pose2D = field(default_factory=Pose2D)
    size_x: float = 0.0
    size_y: float = 0.0

    def corners(self):
        """Return (x1, y1, x2, y2) of the box."""
        half_w = self.size_x / 2.0
        half_h = self.size_y / 2.0
        return (
            self.center.x - half_w,
            self.center.y - half_h,
            self.center.x + half_w,
            self.center.y + half_h,
        )

    def to_dict(self) -> dict:
        return {
            "center": self.center.to_dict(),
            "size_x": self.size_x,
            "size_y": self.size_y,
        }


@dataclass(frozen=True, slots=True)
class ObjectHypothesis:
    """A single (label, score) guess.

    Attributes:
        class_id: Class label. Carries the class *name*, not its index.
        score: Confidence as reported by the detector.
    """

    class_id: str = ""
    score: float = 0.0

    def to_dict(self) -> dict:
        return {"class_id": self.class_id, "score": self.score}


@dataclass(frozen=True, slots=True)
class ObjectHypothesisWithPose:
    hypothesis: ObjectHypothesis = field(default_factory=ObjectHypothesis)

    def to_dict(self) -> dict:
        return {"hypothesis": self.hypothesis.to_dict()}


@dataclass(frozen=True, slots=True)
class Detection2D:
    """One detected object in message form.

    Attributes:
        header: Copy of the source header.
        results: Scored class hypotheses for this object.
        bbox: Center-anchored bounding box.
        id: Optional tracking identifier (empty when untracked).
    """

    header: Header = field(default_factory=Header)
    results: List[ObjectHypothesisWithPose] = field(default_factory=list)
    bbox: BoundingBox2D = field(default_factory=BoundingBox2D)
    id: str = ""

    def to_dict(self) -> dict:
        return {
            "header": self.header.to_dict(),
            "results": [r.to_dict() for r in self.results],
            "bbox": self.bbox.to_dict(),
            "id": self.id,
        }


@dataclass(frozen=True, slots=True)
class Detection2DArray:
    """All detections for one frame, in detector order."""

    header: Header = field(default_factory=Header)
    detections: List[Detection2D] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "header": self.header.to_dict(),
            "detections": [d.to_dict() for d in self.detections],
        }
