"""
Serialization for the detection bridge.

Responsibility:
    Export converted Detection2DArray messages to structured file formats
    (JSON, CSV) for downstream consumption or offline analysis.

Non-goals:
    - No middleware wire encoding.
    - No streaming output; writes complete files on finalize.
"""

import csv
import json
import logging
from pathlib import Path
from typing import List

from detection_bridge.messages import Detection2DArray

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "sec",
    "nanosec",
    "frame_id",
    "center_x",
    "center_y",
    "size_x",
    "size_y",
    "class_id",
    "score",
]


def save_json(messages: List[Detection2DArray], output_path: str) -> None:
    """Export all messages to a JSON file.

    Output schema:
        {
            "messages": [<Detection2DArray.to_dict()>, ...],
            "total_messages": N,
            "total_detections": M
        }

    Raises:
        OSError: If the output path is not writable.
    """
    _ensure_parent_dir(output_path)

    total_detections = sum(len(m.detections) for m in messages)
    payload = {
        "messages": [m.to_dict() for m in messages],
        "total_messages": len(messages),
        "total_detections": total_detections,
    }

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)

    logger.info(
        "JSON output saved: %s (%d messages, %d detections)",
        output_path, len(messages), total_detections,
    )


def save_csv(messages: List[Detection2DArray], output_path: str) -> None:
    """Export all detections to a CSV file, one row per hypothesis.

    Columns: see CSV_FIELDS. Detections without hypotheses are written
    with empty class_id and score.

    Raises:
        OSError: If the output path is not writable.
    """
    _ensure_parent_dir(output_path)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()

        total = 0
        for message in messages:
            for det in message.detections:
                row = {
                    "sec": det.header.stamp.sec,
                    "nanosec": det.header.stamp.nanosec,
                    "frame_id": det.header.frame_id,
                    "center_x": det.bbox.center.x,
                    "center_y": det.bbox.center.y,
                    "size_x": det.bbox.size_x,
                    "size_y": det.bbox.size_y,
                }
                hypotheses = [r.hypothesis for r in det.results] or [None]
                for hyp in hypotheses:
                    writer.writerow({
                        **row,
                        "class_id": hyp.class_id if hyp else "",
                        "score": hyp.score if hyp else "",
                    })
                    total += 1

    logger.info("CSV output saved: %s (%d rows)", output_path, total)


def _ensure_parent_dir(path: str) -> None:
    """Create parent directories if they don't exist."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
