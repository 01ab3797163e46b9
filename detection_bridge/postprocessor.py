"""
Postprocessing of raw detector rows.

Responsibility:
    Parse a detector's post-NMS output array into a list of DetectionResult
    objects. Apply confidence thresholding, drop degenerate boxes, and
    attach class names.

Non-goals:
    - No non-maximum suppression (the detector has already applied it).
    - No coordinate scaling or clamping.

Hard-coded:
    - Row layout: [x, y, width, height, confidence, class_id] with a
      top-left anchored box in absolute pixels.
"""

from typing import List, Sequence

import numpy as np

from detection_bridge.detection import BoundingBox, DetectionResult

_ROW_WIDTH = 6


def parse_detections(
    raw,
    class_names: Sequence[str],
    confidence_threshold: float,
) -> List[DetectionResult]:
    """Parse raw detector rows into DetectionResult objects.

    Args:
        raw: Array-like of shape (N, 6). An empty array of any shape with
             zero elements is accepted.
        class_names: Class names indexed by class id. Ids outside the
                     sequence get an empty name.
        confidence_threshold: Minimum confidence to accept a detection.

    Returns:
        List of DetectionResult objects, sorted by confidence (descending).

    Raises:
        ValueError: If the array is non-empty and not shaped (N, 6).
    """
    rows = np.asarray(raw, dtype=np.float64)
    if rows.size == 0:
        return []

    if rows.ndim != 2 or rows.shape[1] != _ROW_WIDTH:
        raise ValueError(
            f"Expected detector output of shape (N, {_ROW_WIDTH}), "
            f"got {rows.shape}. Rows must be "
            f"[x, y, width, height, confidence, class_id]."
        )

    detections: List[DetectionResult] = []

    for x, y, width, height, confidence, class_id in rows:
        if confidence < confidence_threshold:
            continue

        # Skip degenerate boxes
        if width <= 0 or height <= 0:
            continue

        cls = int(class_id)
        name = class_names[cls] if 0 <= cls < len(class_names) else ""

        detections.append(DetectionResult(
            bbox=BoundingBox(
                x=float(x), y=float(y), width=float(width), height=float(height),
            ),
            confidence=float(confidence),
            class_id=cls,
            class_name=name,
        ))

    # Sort by confidence descending for consistent output ordering
    detections.sort(key=lambda d: d.confidence, reverse=True)

    return detections
