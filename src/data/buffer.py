"""
Sliding sample buffer.

Holds exactly the raw samples needed to build one feature sequence:
window_size + (sequence_length - 1). Once full it keeps sliding by one
sample per push, oldest first out.
"""

from __future__ import annotations

from collections import deque
from typing import Deque

import numpy as np

from src.core.exceptions import ShapeMismatchError

from .schema import RawSample


def required_buffer_size(window_size: int, sequence_length: int) -> int:
    """
    Number of raw samples needed for one full feature sequence.

    sequence_length windows of window_size samples, each advancing by one
    sample: the first window plus one new sample per further step.
    Example: window_size=10, sequence_length=20 -> 10 + 19 = 29.
    """
    return window_size + (sequence_length - 1)


class SampleBuffer:
    """
    Bounded FIFO of raw samples. Index 0 is the oldest sample.

    Not safe for concurrent mutation; callers serialize access.
    """

    def __init__(self, capacity: int, num_axes: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._num_axes = num_axes
        self._samples: Deque[RawSample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def num_axes(self) -> int:
        return self._num_axes

    def push(self, sample: RawSample) -> None:
        if sample.num_axes != self._num_axes:
            raise ShapeMismatchError(
                f"Expected {self._num_axes} axes per sample, got {sample.num_axes}"
            )
        # deque(maxlen) drops from the left when full
        self._samples.append(sample)

    def is_full(self) -> bool:
        return len(self._samples) == self._capacity

    def snapshot(self) -> np.ndarray:
        """Current contents oldest to newest as a (len, num_axes) float64 array."""
        if not self._samples:
            return np.empty((0, self._num_axes), dtype=np.float64)
        return np.array([s.values for s in self._samples], dtype=np.float64)

    def __len__(self) -> int:
        return len(self._samples)
