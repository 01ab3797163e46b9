"""
Detection Bridge — converts detector bounding boxes into 2D detection messages.

Public API:
    - to_detection_2d / to_detection_2d_array: The conversion entry points.
    - DetectionResult, BoundingBox: Detector output records.
    - Header, Time, Detection2D, Detection2DArray: Message records.

All other modules in this package are internal implementation details
of the batch pipeline driven by main.py.

Usage:
    from detection_bridge import Header, to_detection_2d_array

    header = Header.now("camera_link")
    msg = to_detection_2d_array(detections, header, 640, 480)
"""

from detection_bridge.converter import to_detection_2d, to_detection_2d_array
from detection_bridge.detection import BoundingBox, DetectionResult
from detection_bridge.messages import Detection2D, Detection2DArray, Header, Time

__all__ = [
    "BoundingBox",
    "Detection2D",
    "Detection2DArray",
    "DetectionResult",
    "Header",
    "Time",
    "to_detection_2d",
    "to_detection_2d_array",
]
