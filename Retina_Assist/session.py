from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .frame import FrameResult


class ResetEpoch:
    """
    Monotonic generation counter owned by the frame loop.

    Stamp each request with `current`; call `advance()` on a user reset.
    A result that completes after the reset carries an old generation and
    `is_current()` reports it as stale so the caller can drop it.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be >= 0")
        self._generation = int(start)

    @property
    def current(self) -> int:
        return self._generation

    def advance(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, result: FrameResult) -> bool:
        return result.generation == self._generation


@dataclass(frozen=True)
class AnnouncementConfig:
    cooldown_s: float = 1.5

    def __post_init__(self) -> None:
        if self.cooldown_s < 0:
            raise ValueError("cooldown_s must be >= 0")


class AnnouncementGate:
    """
    Throttle spoken alerts: at most one announcement per cooldown window.

    Time is passed in by the caller (seconds, monotonic), so the gate holds no
    clock of its own.
    """

    def __init__(self, cfg: AnnouncementConfig = AnnouncementConfig()) -> None:
        self.cfg = cfg
        self._last_s: Optional[float] = None

    def should_announce(self, now_s: float) -> bool:
        if self._last_s is not None and now_s - self._last_s <= self.cfg.cooldown_s:
            return False
        self._last_s = now_s
        return True

    def reset(self) -> None:
        self._last_s = None
