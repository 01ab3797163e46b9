"""
Tests for the CLI entry point.
"""

import json
from pathlib import Path
from runpy import run_path

import pytest

_MAIN = Path(__file__).resolve().parent.parent / "main.py"


@pytest.fixture(scope="module")
def main():
    return run_path(str(_MAIN))["main"]


def test_main_converts_file(tmp_path, main):
    source = tmp_path / "run.json"
    source.write_text(json.dumps({
        "frames": [
            {
                "stamp": {"sec": 1234567890, "nanosec": 123456789},
                "detections": [{
                    "bbox": {"x": 100, "y": 200, "width": 50, "height": 80},
                    "confidence": 0.85,
                    "class_id": 42,
                    "class_name": "person",
                }],
            },
            {"stamp": {"sec": 1234567891, "nanosec": 0}, "detections": []},
        ],
    }), encoding="utf-8")
    out = tmp_path / "out"

    code = main([
        "--input", str(source),
        "--frame-id", "base_link",
        "--output-mode", "save_json",
        "--output-path", str(out),
    ])

    assert code == 0
    payload = json.loads((out / "detections.json").read_text(encoding="utf-8"))
    assert payload["total_messages"] == 2
    first, second = payload["messages"]
    assert first["header"]["frame_id"] == "base_link"
    assert first["header"]["stamp"] == {"sec": 1234567890, "nanosec": 123456789}
    det = first["detections"][0]
    assert det["bbox"]["center"]["position"] == {"x": 125.0, "y": 240.0}
    assert det["results"][0]["hypothesis"]["class_id"] == "person"
    assert second["detections"] == []


def test_main_missing_input(tmp_path, main):
    code = main([
        "--input", str(tmp_path / "missing.json"),
        "--output-path", str(tmp_path / "out"),
    ])
    assert code == 1


def test_main_bad_output_mode(tmp_path, main):
    code = main(["--output-mode", "display", "--output-path", str(tmp_path)])
    assert code == 1


def test_main_skips_frame_with_bad_bbox(tmp_path, main):
    good = {"bbox": {"x": 0, "y": 0, "width": 10, "height": 10}, "class_name": "car"}
    bad = {"bbox": {"x": "abc", "y": 0, "width": 10, "height": 10}}
    source = tmp_path / "run.json"
    source.write_text(json.dumps({
        "frames": [
            {"stamp": {"sec": 1}, "detections": [good]},
            {"stamp": {"sec": 2}, "detections": [bad]},
            {"stamp": {"sec": 3}, "detections": [good]},
        ],
    }), encoding="utf-8")
    out = tmp_path / "out"

    code = main(["--input", str(source), "--output-path", str(out)])

    assert code == 0
    payload = json.loads((out / "detections.json").read_text(encoding="utf-8"))
    assert payload["total_messages"] == 2
    assert [m["header"]["stamp"]["sec"] for m in payload["messages"]] == [1, 3]


def test_main_frame_id_flag_beats_recording(tmp_path, main):
    source = tmp_path / "run.json"
    source.write_text(json.dumps({
        "frame_id": "camera_optical",
        "frames": [{"stamp": {"sec": 1}, "detections": []}],
    }), encoding="utf-8")
    out = tmp_path / "out"

    code = main([
        "--input", str(source),
        "--frame-id", "base_link",
        "--output-path", str(out),
    ])

    assert code == 0
    payload = json.loads((out / "detections.json").read_text(encoding="utf-8"))
    assert payload["messages"][0]["header"]["frame_id"] == "base_link"


def test_main_recording_frame_id_used_without_flag(tmp_path, main):
    source = tmp_path / "run.json"
    source.write_text(json.dumps({
        "frame_id": "camera_optical",
        "frames": [{"stamp": {"sec": 1}, "detections": []}],
    }), encoding="utf-8")
    out = tmp_path / "out"

    code = main(["--input", str(source), "--output-path", str(out)])

    assert code == 0
    payload = json.loads((out / "detections.json").read_text(encoding="utf-8"))
    assert payload["messages"][0]["header"]["frame_id"] == "camera_optical"
