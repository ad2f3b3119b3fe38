"""
Per-frame envelope: jalankan pipeline tanpa pernah melempar exception ke frame loop.

Setiap pemanggilan menghasilkan `FrameResult` yang eksplisit:
- OK: ada data
- SKIPPED: buffer tidak bisa dibaca frame ini (transient), state navigasi tidak diubah
- FAILED: input tidak valid / error lain, pesan error disimpan
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, Sequence, TypeVar

import numpy as np

from detect_kit.postprocess import DetectionPostprocessor
from detect_kit.types import Detection

from .depth import DepthBuffer, DepthReadError, DepthZoneConfig, ZoneReading, analyze_zones
from .navigation import NavigationConfig, NavigationDirective, decide_directive


log = logging.getLogger(__name__)

T = TypeVar("T")


class FrameStatus(str, Enum):
    OK = "OK"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class FrameResult(Generic[T]):
    status: FrameStatus
    generation: int
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == FrameStatus.OK

    @classmethod
    def success(cls, value: T, generation: int) -> "FrameResult[T]":
        return cls(status=FrameStatus.OK, generation=generation, value=value)

    @classmethod
    def skipped(cls, error: str, generation: int) -> "FrameResult[T]":
        return cls(status=FrameStatus.SKIPPED, generation=generation, error=error)

    @classmethod
    def failed(cls, error: str, generation: int) -> "FrameResult[T]":
        return cls(status=FrameStatus.FAILED, generation=generation, error=error)


@dataclass(frozen=True)
class DepthFrame:
    reading: ZoneReading
    directive: NavigationDirective


def analyze_depth_frame(
    buffer: DepthBuffer,
    width: int,
    height: int,
    *,
    generation: int = 0,
    zone_cfg: DepthZoneConfig = DepthZoneConfig(),
    nav_cfg: NavigationConfig = NavigationConfig(),
) -> FrameResult[DepthFrame]:
    try:
        reading = analyze_zones(buffer, width, height, zone_cfg)
    except DepthReadError as exc:
        log.debug("Depth frame %d skipped: %s", generation, exc)
        return FrameResult.skipped(str(exc), generation)
    except Exception as exc:
        log.warning("Depth frame %d failed: %s", generation, exc)
        return FrameResult.failed(str(exc), generation)

    directive = decide_directive(reading, nav_cfg)
    return FrameResult.success(DepthFrame(reading=reading, directive=directive), generation)


def process_detection_frame(
    tensor: np.ndarray,
    shape: Optional[Sequence[int]],
    postprocessor: DetectionPostprocessor,
    *,
    generation: int = 0,
) -> FrameResult[List[Detection]]:
    try:
        detections = postprocessor.process(tensor, shape)
    except Exception as exc:
        log.warning("Detection frame %d failed: %s", generation, exc)
        return FrameResult.failed(str(exc), generation)
    return FrameResult.success(detections, generation)
