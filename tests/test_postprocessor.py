"""
Tests for the postprocessing module.
"""

import numpy as np
import pytest

from detection_bridge.postprocessor import parse_detections

_NAMES = ("person", "car")


def test_parse_valid_detection():
    """Test parsing a single raw detector row."""
    raw = np.array([[100, 200, 50, 80, 0.85, 0]], dtype=np.float32)

    detections = parse_detections(raw, class_names=_NAMES, confidence_threshold=0.5)

    assert len(detections) == 1
    det = detections[0]
    assert det.bbox.x == 100
    assert det.bbox.y == 200
    assert det.bbox.width == 50
    assert det.bbox.height == 80
    assert det.confidence == pytest.approx(0.85, abs=1e-5)
    assert det.class_id == 0
    assert det.class_name == "person"


def test_parse_confidence_filtering():
    raw = np.array([[0, 0, 10, 10, 0.4, 1]], dtype=np.float32)

    detections = parse_detections(raw, class_names=_NAMES, confidence_threshold=0.5)
    assert detections == []


def test_parse_degenerate_box():
    raw = [[0, 0, 0, 10, 0.9, 0], [0, 0, 10, -1, 0.9, 0]]

    detections = parse_detections(raw, class_names=_NAMES, confidence_threshold=0.5)
    assert detections == []


def test_parse_sorted_by_confidence():
    raw = [
        [0, 0, 10, 10, 0.6, 0],
        [5, 5, 10, 10, 0.9, 1],
    ]

    detections = parse_detections(raw, class_names=_NAMES, confidence_threshold=0.5)

    assert [d.class_name for d in detections] == ["car", "person"]


def test_parse_unknown_class_id():
    raw = [[0, 0, 10, 10, 0.9, 7]]

    detections = parse_detections(raw, class_names=_NAMES, confidence_threshold=0.5)

    assert detections[0].class_id == 7
    assert detections[0].class_name == ""


def test_parse_empty():
    assert parse_detections([], class_names=_NAMES, confidence_threshold=0.5) == []
    assert parse_detections(np.zeros((0, 6)), class_names=_NAMES, confidence_threshold=0.5) == []


def test_parse_bad_shape():
    with pytest.raises(ValueError, match="shape"):
        parse_detections([[0, 0, 10, 10, 0.9]], class_names=_NAMES, confidence_threshold=0.5)
