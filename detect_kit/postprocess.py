from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .decode import DecoderConfig, TensorDecoder
from .nms import ResolverConfig, resolve
from .types import Detection


@dataclass(frozen=True)
class PostprocessConfig:
    """
    Konfigurasi untuk decode + NMS dalam satu langkah
    """

    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)


# Six banknote classes in alphabetical label order (10, 100, 20, 200, 50, 500).
# The 50 note is hard to see (low bar); 500 is high value and easily confused
# with a weak 50 (strict bar).
CURRENCY_PRESET = PostprocessConfig(
    decoder=DecoderConfig(default_threshold=0.40, class_thresholds={4: 0.25, 5: 0.50}),
    resolver=ResolverConfig(duplicate_iou=0.70, conflict_iou=0.85),
)

# Generic object scanner: a score must beat 0.30 outright; equal IoU
# thresholds make NMS class-agnostic at 0.5.
OBJECT_PRESET = PostprocessConfig(
    decoder=DecoderConfig(default_threshold=0.30, threshold_inclusive=False),
    resolver=ResolverConfig(duplicate_iou=0.50, conflict_iou=0.50),
)


class DetectionPostprocessor:
    """
    Post-process untuk output detector: decode -> threshold per kelas -> NMS/conflict.

    Input berupa flat float array (atau ndarray) beserta shape [1, d1, d2].
    Stateless; satu instance boleh dipakai untuk banyak frame.
    """

    def __init__(self, cfg: PostprocessConfig = PostprocessConfig()):
        self.cfg = cfg
        self.decoder = TensorDecoder(cfg.decoder)

    def process(self, tensor: np.ndarray, shape: Optional[Sequence[int]] = None) -> List[Detection]:
        detections = self.decoder.decode(tensor, shape)
        if not detections:
            return []
        return resolve(detections, self.cfg.resolver)
