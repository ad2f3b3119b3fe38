from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .errors import UnsupportedTensorShapeError
from .types import Box, Detection


GEOMETRY_CHANNELS = 4


@dataclass(frozen=True)
class DecoderConfig:
    """
    Decode settings for single-image YOLO style outputs shaped [1, d1, d2].

    `class_thresholds` overrides `default_threshold` per class id, e.g. a
    hard-to-see class gets a lower bar and an easily confused one a stricter bar.
    The mapping is copied into a read-only view at construction.

    With `threshold_inclusive=False` a score must be strictly above its threshold.
    """

    input_size: int = 640
    default_threshold: float = 0.40
    class_thresholds: Mapping[int, float] = field(default_factory=dict, hash=False)
    threshold_inclusive: bool = True
    # Boxes wider or taller than this fraction of `input_size` are dropped.
    max_box_fraction: float = 0.95
    # x values above this (within the probe window) mean pixel-space coords.
    normalized_probe_limit: float = 5.0
    normalized_probe_anchors: int = 50

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_thresholds", MappingProxyType(dict(self.class_thresholds)))

        if self.input_size <= 0:
            raise ValueError("input_size must be > 0")
        if not (0.0 <= self.default_threshold <= 1.0):
            raise ValueError("default_threshold must be within [0, 1]")
        for class_id, threshold in self.class_thresholds.items():
            if isinstance(class_id, bool) or not isinstance(class_id, int) or class_id < 0:
                raise ValueError(f"class_thresholds keys must be class ids >= 0 (got {class_id!r})")
            if not (0.0 <= threshold <= 1.0):
                raise ValueError(f"class_thresholds[{class_id}] must be within [0, 1]")
        if not (0.0 < self.max_box_fraction <= 1.0):
            raise ValueError("max_box_fraction must be within (0, 1]")
        if self.normalized_probe_anchors < 1:
            raise ValueError("normalized_probe_anchors must be >= 1")

    def threshold_for(self, class_id: int) -> float:
        return self.class_thresholds.get(class_id, self.default_threshold)


@dataclass(frozen=True)
class TensorLayout:
    channels_last: bool
    anchors: int
    channels: int

    @property
    def num_classes(self) -> int:
        return self.channels - GEOMETRY_CHANNELS


def resolve_layout(shape: Sequence[int]) -> TensorLayout:
    """
    Infer anchor/channel orientation from [batch, d1, d2] alone.

    Exports disagree on orientation: (1, 8400, 10) is channels-last,
    (1, 10, 8400) is channels-first.
    """

    dims = tuple(int(d) for d in shape)
    if len(dims) != 3:
        raise UnsupportedTensorShapeError(dims, "expected [batch, d1, d2]")
    batch, d1, d2 = dims
    if batch != 1:
        raise UnsupportedTensorShapeError(dims, "batch > 1 is not supported, pass one image at a time")
    if d1 < 0 or d2 < 0:
        raise UnsupportedTensorShapeError(dims, "negative dimension")

    channels_last = d1 > d2
    anchors, channels = (d1, d2) if channels_last else (d2, d1)
    if channels < GEOMETRY_CHANNELS + 1:
        raise UnsupportedTensorShapeError(dims, f"need >= {GEOMETRY_CHANNELS + 1} channels, got {channels}")
    return TensorLayout(channels_last=channels_last, anchors=anchors, channels=channels)


class TensorDecoder:
    """
    Converts a raw detector tensor into thresholded `Detection`s.

    Supported layouts (per image, batch of one):
    - (1, A, 4 + C): channels-last, one row per anchor
    - (1, 4 + C, A): channels-first, e.g. 10 x 8400 for a 6-class export

    Geometry is [cx, cy, w, h] followed by C class scores; there is no
    objectness channel. Output order follows anchor order.
    """

    def __init__(self, cfg: DecoderConfig = DecoderConfig()):
        self.cfg = cfg

    def inspect(self, shape: Sequence[int]) -> TensorLayout:
        return resolve_layout(shape)

    def decode(self, tensor: np.ndarray, shape: Optional[Sequence[int]] = None) -> List[Detection]:
        rows, layout = self._as_anchor_rows(tensor, shape)
        if layout.anchors == 0:
            return []

        geometry = rows[:, :GEOMETRY_CHANNELS]
        if not self._is_pixel_space(geometry[:, 0]):
            geometry = geometry * float(self.cfg.input_size)

        class_ids, scores = self._best_classes(rows[:, GEOMETRY_CHANNELS:])
        thresholds = self._thresholds(class_ids)
        passed = scores >= thresholds if self.cfg.threshold_inclusive else scores > thresholds
        keep = passed & (scores > 0)

        limit = self.cfg.input_size * self.cfg.max_box_fraction
        w = geometry[:, 2]
        h = geometry[:, 3]
        keep &= np.isfinite(geometry).all(axis=1)
        keep &= (w >= 0) & (h >= 0) & (w <= limit) & (h <= limit)

        detections: List[Detection] = []
        for i in np.flatnonzero(keep):
            cx, cy, bw, bh = (float(v) for v in geometry[i])
            detections.append(
                Detection(
                    box=Box.from_center(cx, cy, bw, bh),
                    class_id=int(class_ids[i]),
                    score=float(scores[i]),
                )
            )
        return detections

    # ------------------------------------------------------------------ #
    # Helper internal
    # ------------------------------------------------------------------ #
    def _as_anchor_rows(
        self, tensor: np.ndarray, shape: Optional[Sequence[int]]
    ) -> Tuple[np.ndarray, TensorLayout]:
        """
        Return an (anchors, channels) float32 view regardless of orientation.
        """

        t = np.asarray(tensor, dtype=np.float32)
        if shape is None:
            shape = t.shape
        layout = resolve_layout(shape)

        _, d1, d2 = (int(d) for d in shape)
        if t.size != d1 * d2:
            raise UnsupportedTensorShapeError(
                shape, f"tensor holds {t.size} values, shape implies {d1 * d2}"
            )

        grid = t.reshape(d1, d2)
        rows = grid if layout.channels_last else grid.T
        return rows, layout

    def _is_pixel_space(self, xs: np.ndarray) -> bool:
        probe = xs[: self.cfg.normalized_probe_anchors]
        return bool(np.any(probe > self.cfg.normalized_probe_limit))

    def _best_classes(self, class_scores: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        # np.argmax returns the first maximum, so ties go to the lowest class id.
        class_ids = np.argmax(class_scores, axis=1)
        scores = class_scores[np.arange(class_scores.shape[0]), class_ids]
        return class_ids, scores

    def _thresholds(self, class_ids: np.ndarray) -> np.ndarray:
        thresholds = np.full(class_ids.shape, self.cfg.default_threshold, dtype=np.float32)
        for class_id, threshold in self.cfg.class_thresholds.items():
            thresholds[class_ids == class_id] = threshold
        return thresholds


def decode(
    tensor: np.ndarray,
    shape: Optional[Sequence[int]] = None,
    cfg: DecoderConfig = DecoderConfig(),
) -> List[Detection]:
    return TensorDecoder(cfg).decode(tensor, shape)
