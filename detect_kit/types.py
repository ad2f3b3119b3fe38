from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Box:
    """
    Axis-aligned box in model input pixels (left/top inclusive origin).
    """

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.right < self.left:
            raise ValueError(f"Box right ({self.right}) must be >= left ({self.left})")
        if self.bottom < self.top:
            raise ValueError(f"Box bottom ({self.bottom}) must be >= top ({self.top})")

    @classmethod
    def from_center(cls, cx: float, cy: float, w: float, h: float) -> "Box":
        return cls(
            left=cx - w / 2,
            top=cy - h / 2,
            right=cx + w / 2,
            bottom=cy + h / 2,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.right) * 0.5, (self.top + self.bottom) * 0.5

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        return self.left, self.top, self.right, self.bottom


@dataclass(frozen=True)
class Detection:
    """
    One labeled box surviving decode. Lives for a single frame only.
    """

    box: Box
    class_id: int
    score: float
