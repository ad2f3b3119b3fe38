"""
Analisa zona kedalaman (depth) untuk menghindari rintangan.

Depth image 16-bit (milimeter) dibagi menjadi tiga zona kolom: kiri, tengah,
kanan. Hanya pita horizontal di tengah frame yang disampling, setiap
`stride` piksel, supaya biaya per frame tetap kecil.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Sequence, Tuple, Union

import numpy as np


NO_READING = 9999

_SNAP_TOLERANCE = Fraction(1, 10**9)

DepthBuffer = Union[np.ndarray, Sequence[int], bytes, bytearray, memoryview]


class DepthReadError(RuntimeError):
    """
    The depth buffer could not be read for this frame (transient, non-fatal).
    """


def _as_fraction(value: Union[float, Fraction], key: str) -> Fraction:
    if isinstance(value, bool) or not isinstance(value, (int, float, Fraction)):
        raise ValueError(f"{key} must be a number")
    exact = Fraction(value)
    # 0.333... from JSON should mean exactly 1/3; anything further off is kept as given.
    snapped = exact.limit_denominator(1000)
    if abs(exact - snapped) <= _SNAP_TOLERANCE:
        return snapped
    return exact


@dataclass(frozen=True)
class DepthZoneConfig:
    band_start: float = 0.4
    band_end: float = 0.6
    stride: int = 4
    min_valid_mm: int = 100
    max_valid_mm: int = 5000
    left_fraction: Fraction = Fraction(1, 3)
    center_fraction: Fraction = Fraction(1, 3)

    def __post_init__(self) -> None:
        object.__setattr__(self, "left_fraction", _as_fraction(self.left_fraction, "left_fraction"))
        object.__setattr__(self, "center_fraction", _as_fraction(self.center_fraction, "center_fraction"))

        if not (0.0 <= self.band_start < self.band_end <= 1.0):
            raise ValueError("band fractions must satisfy 0 <= band_start < band_end <= 1")
        if self.stride < 1:
            raise ValueError("stride must be >= 1")
        if self.min_valid_mm < 0:
            raise ValueError("min_valid_mm must be >= 0")
        if self.max_valid_mm < self.min_valid_mm:
            raise ValueError("max_valid_mm must be >= min_valid_mm")
        if self.left_fraction <= 0 or self.center_fraction <= 0:
            raise ValueError("zone fractions must be > 0")
        if self.left_fraction + self.center_fraction >= 1:
            raise ValueError("left_fraction + center_fraction must leave room for the right zone")

    def band_rows(self, height: int) -> Tuple[int, int]:
        return int(height * self.band_start), int(height * self.band_end)

    def zone_edges(self, width: int) -> Tuple[int, int]:
        """
        Column where center starts and column where right starts.

        With the default thirds this is (width // 3, 2 * (width // 3)).
        """

        left_end = int(width * self.left_fraction)
        return left_end, left_end + int(width * self.center_fraction)


@dataclass(frozen=True)
class ZoneAverage:
    sum: int = 0
    count: int = 0

    @property
    def average(self) -> int:
        # NO_READING means unknown/far, never a real distance.
        if self.count <= 0:
            return NO_READING
        return int(self.sum // self.count)

    @property
    def has_reading(self) -> bool:
        return self.count > 0


@dataclass(frozen=True)
class ZoneReading:
    left: ZoneAverage
    center: ZoneAverage
    right: ZoneAverage

    @property
    def averages(self) -> Tuple[int, int, int]:
        return self.left.average, self.center.average, self.right.average


def _read_depth_values(buffer: DepthBuffer) -> np.ndarray:
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        # Raw 16-bit plane as delivered by the sensor.
        return np.frombuffer(buffer, dtype=np.uint16)
    depth = np.asarray(buffer).reshape(-1)
    if depth.dtype == np.int16:
        # Signed short storage of unsigned millimetres.
        return depth.view(np.uint16)
    return depth


def analyze_zones(
    buffer: DepthBuffer,
    width: int,
    height: int,
    cfg: DepthZoneConfig = DepthZoneConfig(),
) -> ZoneReading:
    """
    Average valid depth per zone over the sampled band.

    Samples whose flat index falls outside the buffer are skipped. Readings
    outside [min_valid_mm, max_valid_mm] are ignored entirely. A zone with
    no valid sample averages to NO_READING. The buffer is never modified.

    Raises:
        ValueError: width/height are not positive.
        DepthReadError: the buffer could not be read.
    """

    if width <= 0 or height <= 0:
        raise ValueError(f"width/height must be > 0 (got {width}x{height})")

    start_y, end_y = cfg.band_rows(height)
    ys = np.arange(start_y, end_y, cfg.stride, dtype=np.int64)
    xs = np.arange(0, width, cfg.stride, dtype=np.int64)
    index = (ys[:, None] * width + xs[None, :]).ravel()
    cols = np.broadcast_to(xs, (ys.size, xs.size)).ravel()

    try:
        depth = _read_depth_values(buffer)
        inside = index < depth.size
        index, cols = index[inside], cols[inside]
        values = depth[index].astype(np.int64)
    except Exception as exc:
        raise DepthReadError(f"Failed to read depth buffer: {exc}") from exc

    valid = (values >= cfg.min_valid_mm) & (values <= cfg.max_valid_mm)
    values, cols = values[valid], cols[valid]

    left_end, center_end = cfg.zone_edges(width)
    in_left = cols < left_end
    in_center = (cols >= left_end) & (cols < center_end)
    in_right = cols >= center_end

    return ZoneReading(
        left=ZoneAverage(sum=int(values[in_left].sum()), count=int(in_left.sum())),
        center=ZoneAverage(sum=int(values[in_center].sum()), count=int(in_center.sum())),
        right=ZoneAverage(sum=int(values[in_right].sum()), count=int(in_right.sum())),
    )
