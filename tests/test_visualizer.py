"""
Tests for the visualization module.
"""

import numpy as np

from detection_bridge.config import VisualizationConfig
from detection_bridge.converter import to_detection_2d_array
from detection_bridge.detection import BoundingBox, DetectionResult
from detection_bridge.messages import Detection2DArray, Header
from detection_bridge.visualizer import draw_detections


def _message():
    det = DetectionResult(BoundingBox(20, 30, 40, 20), 0.9, 0, "person")
    return to_detection_2d_array([det], Header(frame_id="camera_link"), 100, 100)


def test_draw_does_not_modify_input():
    frame = np.zeros((100, 100, 3), dtype=np.uint8)

    annotated = draw_detections(frame, _message(), VisualizationConfig())

    assert frame.sum() == 0
    assert annotated.shape == frame.shape
    assert annotated.sum() > 0


def test_draw_box_edges():
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    config = VisualizationConfig(box_color=(0, 0, 255), thickness=1, show_label=False)

    annotated = draw_detections(frame, _message(), config)

    # Top-left and bottom-right corners of the box
    assert tuple(annotated[30, 20]) == (0, 0, 255)
    assert tuple(annotated[50, 60]) == (0, 0, 255)
    # Interior untouched
    assert tuple(annotated[40, 40]) == (0, 0, 0)


def test_draw_empty_message():
    frame = np.zeros((10, 10, 3), dtype=np.uint8)

    annotated = draw_detections(frame, Detection2DArray(), VisualizationConfig())

    assert np.array_equal(annotated, frame)
