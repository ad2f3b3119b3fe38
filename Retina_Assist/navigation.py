from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .depth import ZoneReading


class NavigationDirective(str, Enum):
    STOP = "STOP"
    WARN_LEFT = "WARN_LEFT"
    WARN_RIGHT = "WARN_RIGHT"
    CLEAR = "CLEAR"

    @property
    def phrase(self) -> Optional[str]:
        return _PHRASES.get(self)

    @property
    def haptic(self) -> bool:
        return self is NavigationDirective.STOP


_PHRASES = {
    NavigationDirective.STOP: "Stop.",
    NavigationDirective.WARN_LEFT: "Obstacle Left.",
    NavigationDirective.WARN_RIGHT: "Obstacle Right.",
}


@dataclass(frozen=True)
class NavigationConfig:
    stop_threshold_mm: int = 900
    warn_threshold_mm: int = 1500

    def __post_init__(self) -> None:
        if self.stop_threshold_mm <= 0:
            raise ValueError("stop_threshold_mm must be > 0")
        if self.warn_threshold_mm <= 0:
            raise ValueError("warn_threshold_mm must be > 0")


def decide_directive(
    zones: Union[ZoneReading, Tuple[int, int, int]],
    cfg: NavigationConfig = NavigationConfig(),
) -> NavigationDirective:
    """
    Map (left, center, right) zone averages to one directive.

    Checked in priority order, first match wins:
    - center closer than the stop threshold -> STOP
    - only the left side closer than the warn threshold -> WARN_LEFT
    - only the right side closer than the warn threshold -> WARN_RIGHT
    - otherwise CLEAR (nothing to announce)

    NO_READING (9999) zones compare as far away.
    """

    if isinstance(zones, ZoneReading):
        left, center, right = zones.averages
    else:
        left, center, right = zones

    if center < cfg.stop_threshold_mm:
        return NavigationDirective.STOP
    warn = cfg.warn_threshold_mm
    if left < warn and right > warn:
        return NavigationDirective.WARN_LEFT
    if right < warn and left > warn:
        return NavigationDirective.WARN_RIGHT
    return NavigationDirective.CLEAR
