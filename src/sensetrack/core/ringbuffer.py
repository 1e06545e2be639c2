from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

import numpy as np

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """
    Fixed-size ring buffer for streaming readings.
    Overwrites the oldest entry when full, keeping insertion order.
    """

    __slots__ = ("_capacity", "_data", "_start", "_size")

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._data: list[Optional[T]] = [None] * self._capacity
        self._start = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, item: T) -> None:
        """Push ``item`` to the end, evicting the oldest entry when full."""
        idx = (self._start + self._size) % self._capacity
        self._data[idx] = item
        if self._size < self._capacity:
            self._size += 1
        else:
            self._start = (self._start + 1) % self._capacity

    def last(self) -> Optional[T]:
        """Return the newest entry, or ``None`` if the buffer is empty."""
        if self._size == 0:
            return None
        return self[-1]

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._size

    def __getitem__(self, index: int) -> T:
        """Support buf[i] and buf[-1] indexing over the *logical* contents."""
        size = self._size
        if index < 0:
            index += size
        if index < 0 or index >= size:
            raise IndexError("RingBuffer index out of range")
        item = self._data[(self._start + index) % self._capacity]
        assert item is not None
        return item

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            item = self._data[(self._start + i) % self._capacity]
            assert item is not None
            yield item

    def to_list(self) -> list[T]:
        """Return a copy of the logical contents, oldest first."""
        return list(self)

    def to_array(self) -> np.ndarray:
        """Return the logical contents as a ``float64`` array, oldest first."""
        return np.fromiter(self, dtype=np.float64, count=self._size)
