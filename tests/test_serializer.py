"""
Tests for the serializer module.
"""

import csv
import json

import pytest

from detection_bridge.converter import to_detection_2d_array
from detection_bridge.detection import BoundingBox, DetectionResult
from detection_bridge.messages import Detection2DArray, Header, Time
from detection_bridge.serializer import CSV_FIELDS, save_csv, save_json


@pytest.fixture
def messages():
    header = Header(stamp=Time(sec=7, nanosec=9), frame_id="camera_link")
    dets = [
        DetectionResult(BoundingBox(10, 20, 30, 40), 0.9, 0, "car"),
        DetectionResult(BoundingBox(100, 200, 50, 60), 0.7, 1, "truck"),
    ]
    return [
        to_detection_2d_array(dets, header, 640, 480),
        to_detection_2d_array([], header, 640, 480),
    ]


def test_save_json(tmp_path, messages):
    output = tmp_path / "nested" / "detections.json"

    save_json(messages, str(output))

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["total_messages"] == 2
    assert payload["total_detections"] == 2
    first = payload["messages"][0]["detections"][0]
    assert first["bbox"]["center"]["position"] == {"x": 25.0, "y": 40.0}
    assert first["results"][0]["hypothesis"] == {"class_id": "car", "score": 0.9}
    assert payload["messages"][1]["detections"] == []
    assert payload["messages"][1]["header"]["frame_id"] == "camera_link"


def test_save_csv(tmp_path, messages):
    output = tmp_path / "detections.csv"

    save_csv(messages, str(output))

    with open(output, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == CSV_FIELDS
        rows = list(reader)

    assert len(rows) == 2
    assert rows[1]["class_id"] == "truck"
    assert float(rows[1]["center_x"]) == 125.0
    assert float(rows[1]["center_y"]) == 230.0
    assert rows[1]["sec"] == "7"


def test_save_json_empty(tmp_path):
    output = tmp_path / "detections.json"

    save_json([Detection2DArray()], str(output))

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["total_detections"] == 0
