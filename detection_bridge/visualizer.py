"""
Visualization for the detection bridge.

Responsibility:
    Draw Detection2DArray boxes and optional class/score labels onto a
    frame for debugging converted output. This is a pure rendering
    module: it produces an annotated copy of the frame and performs no I/O.

Non-goals:
    - No file writing, window management, or display logic.
    - No conversion logic.
"""

import cv2
import numpy as np

from detection_bridge.config import VisualizationConfig
from detection_bridge.messages import Detection2DArray

# Hard-coded rendering constants (cosmetic internals, not user-facing)
_FONT = cv2.FONT_HERSHEY_SIMPLEX
_FONT_SCALE = 0.5
_FONT_THICKNESS = 1
_LABEL_PADDING = 4


def draw_detections(
    frame: np.ndarray,
    message: Detection2DArray,
    config: VisualizationConfig,
) -> np.ndarray:
    """Draw a message's bounding boxes and labels onto a frame.

    Args:
        frame: Input BGR image (not modified; a copy is returned).
        message: Converted detections for this frame.
        config: Visualization parameters (color, thickness, labels).

    Returns:
        A new BGR numpy array with detections drawn.
    """
    annotated = frame.copy()

    for det in message.detections:
        x1, y1, x2, y2 = (int(round(v)) for v in det.bbox.corners())

        cv2.rectangle(
            annotated,
            (x1, y1),
            (x2, y2),
            color=config.box_color,
            thickness=config.thickness,
        )

        if not config.show_label or not det.results:
            continue

        hyp = det.results[0].hypothesis
        label = f"{hyp.class_id} {hyp.score:.2f}".strip()
        (text_w, text_h), _ = cv2.getTextSize(
            label, _FONT, _FONT_SCALE, _FONT_THICKNESS
        )

        # Label background (above the box, or below if too close to top)
        label_y = y1 - _LABEL_PADDING
        if label_y - text_h - _LABEL_PADDING < 0:
            label_y = y2 + text_h + _LABEL_PADDING

        cv2.rectangle(
            annotated,
            (x1, label_y - text_h - _LABEL_PADDING),
            (x1 + text_w + _LABEL_PADDING, label_y + _LABEL_PADDING),
            color=config.box_color,
            thickness=cv2.FILLED,
        )

        cv2.putText(
            annotated,
            label,
            (x1 + _LABEL_PADDING // 2, label_y),
            _FONT,
            _FONT_SCALE,
            (0, 0, 0),  # Black text on colored background
            _FONT_THICKNESS,
            cv2.LINE_AA,
        )

    return annotated
