"""
Conversion from detector output to 2D detection messages.

Responsibility:
    Map top-left anchored DetectionResult boxes into center-anchored
    Detection2D messages, attaching one scored hypothesis and a copy of
    the caller's header.

Contract:
    - center = (x + width / 2, y + height / 2), computed in floating point.
    - size_x / size_y are the input width / height, unscaled.
    - The hypothesis class_id is the class *name*; score is the raw
      confidence, neither clamped nor rescaled.
    - Both functions are total and pure: no validation, no state, no I/O.

Non-goals:
    - No filtering or reordering of detections.
    - No coordinate normalization. image_width / image_height are part of
      the call signature but do not affect the result.
"""

from typing import Sequence

from detection_bridge.detection import DetectionResult
from detection_bridge.messages import (
    BoundingBox2D,
    Detection2D,
    Detection2DArray,
    Header,
    ObjectHypothesis,
    ObjectHypothesisWithPose,
    Point2D,
    Pose2D,
)


def to_detection_2d(
    det: DetectionResult,
    header: Header,
    image_width: int,
    image_height: int,
) -> Detection2D:
    """Convert a single detection into a Detection2D message.

    Args:
        det: Detector output with a top-left anchored box.
        header: Timestamp and frame id to copy into the message.
        image_width: Source image width in pixels (unused).
        image_height: Source image height in pixels (unused).

    Returns:
        A new Detection2D carrying exactly one hypothesis.
    """
    width = float(det.bbox.width)
    height = float(det.bbox.height)

    bbox = BoundingBox2D(
        center=Pose2D(
            position=Point2D(
                x=float(det.bbox.x) + width / 2.0,
                y=float(det.bbox.y) + height / 2.0,
            ),
        ),
        size_x=width,
        size_y=height,
    )

    hypothesis = ObjectHypothesisWithPose(
        hypothesis=ObjectHypothesis(
            class_id=det.class_name,
            score=float(det.confidence),
        ),
    )

    return Detection2D(header=header.copy(), results=[hypothesis], bbox=bbox)


def to_detection_2d_array(
    detections: Sequence[DetectionResult],
    header: Header,
    image_width: int,
    image_height: int,
) -> Detection2DArray:
    """Convert a frame's detections into a Detection2DArray message.

    Detections are converted one-to-one in input order. An empty input
    yields a message with no detections and a populated header.
    """
    return Detection2DArray(
        header=header.copy(),
        detections=[
            to_detection_2d(det, header, image_width, image_height)
            for det in detections
        ],
    )
