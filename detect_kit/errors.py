from __future__ import annotations

from typing import Sequence


class UnsupportedTensorShapeError(ValueError):
    """
    Raised when a model output cannot be interpreted as [1, d1, d2] with
    4 geometry channels and at least one class channel.
    """

    def __init__(self, shape: Sequence[int], reason: str):
        self.shape = tuple(int(d) for d in shape)
        self.reason = reason
        super().__init__(f"Unsupported tensor shape {self.shape}: {reason}")
