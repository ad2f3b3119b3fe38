from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .geometry import boxes_to_array, iou_one_to_many
from .types import Detection


@dataclass(frozen=True)
class ResolverConfig:
    # Same-class overlap above this is the same object detected twice.
    duplicate_iou: float = 0.70
    # Overlap above this, whatever the classes, is model confusion over one object.
    conflict_iou: float = 0.85
    max_detections: Optional[int] = None

    def __post_init__(self) -> None:
        if not (0.0 <= self.duplicate_iou <= 1.0):
            raise ValueError("duplicate_iou must be within [0, 1]")
        if not (0.0 <= self.conflict_iou <= 1.0):
            raise ValueError("conflict_iou must be within [0, 1]")
        if self.max_detections is not None and self.max_detections < 1:
            raise ValueError("max_detections must be >= 1 when set")


def resolve(detections: Sequence[Detection], cfg: ResolverConfig = ResolverConfig()) -> List[Detection]:
    """
    Greedy NMS with cross-class conflict removal.

    Detections are visited by score, highest first (ties keep input order).
    Each accepted detection removes every remaining candidate that either
    shares its class and overlaps it by more than `duplicate_iou`, or overlaps
    it by more than `conflict_iou` regardless of class. The higher score wins.

    Returns the accepted detections in selection order.
    """

    if not detections:
        return []

    boxes = boxes_to_array(detections)
    scores = np.array([d.score for d in detections], dtype=np.float64)
    class_ids = np.array([d.class_id for d in detections], dtype=np.int64)

    order = np.argsort(-scores, kind="stable")
    keep: List[int] = []

    while order.size > 0:
        if cfg.max_detections is not None and len(keep) >= cfg.max_detections:
            break
        i = int(order[0])
        keep.append(i)

        rest = order[1:]
        overlap = iou_one_to_many(detections[i].box.as_xyxy(), boxes[rest])
        duplicate = (class_ids[rest] == class_ids[i]) & (overlap > cfg.duplicate_iou)
        conflict = overlap > cfg.conflict_iou
        order = rest[~(duplicate | conflict)]

    return [detections[i] for i in keep]
