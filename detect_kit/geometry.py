from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .types import Box, Detection


def iou(a: Box, b: Box) -> float:
    """
    Intersection over union of two boxes. A zero union yields 0.0.
    """

    x1 = max(a.left, b.left)
    y1 = max(a.top, b.top)
    x2 = min(a.right, b.right)
    y2 = min(a.bottom, b.bottom)

    inter = max(0.0, x2 - x1) * max(0.0, y2 - y1)
    union = a.area + b.area - inter
    if union == 0:
        return 0.0
    return float(inter / union)


def boxes_to_array(detections: Sequence[Detection]) -> np.ndarray:
    """
    Stack detection boxes as an (N, 4) float64 array in xyxy order.
    """

    if not detections:
        return np.empty((0, 4), dtype=np.float64)
    return np.array([d.box.as_xyxy() for d in detections], dtype=np.float64)


def iou_one_to_many(box_xyxy: Tuple[float, float, float, float], boxes: np.ndarray) -> np.ndarray:
    """
    Vectorized `iou` of one box against boxes shape (N, 4). Same zero-union rule.
    """

    if boxes.size == 0:
        return np.empty((0,), dtype=np.float64)

    left, top, right, bottom = box_xyxy
    xx1 = np.maximum(left, boxes[:, 0])
    yy1 = np.maximum(top, boxes[:, 1])
    xx2 = np.minimum(right, boxes[:, 2])
    yy2 = np.minimum(bottom, boxes[:, 3])

    w = np.maximum(0.0, xx2 - xx1)
    h = np.maximum(0.0, yy2 - yy1)
    inter = w * h
    area = (right - left) * (bottom - top)
    areas = (boxes[:, 2] - boxes[:, 0]) * (boxes[:, 3] - boxes[:, 1])
    union = area + areas - inter

    out = np.zeros_like(inter)
    np.divide(inter, union, out=out, where=union != 0)
    return out
