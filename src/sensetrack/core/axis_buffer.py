"""Bounded reading window for one physical axis."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..analysis.peaks import count_peaks
from .ringbuffer import RingBuffer

logger = logging.getLogger(__name__)


class AxisBuffer:
    """
    Recent readings of one axis plus its peak-count state.

    The window holds at most ``capacity`` readings; appending to a full window
    drops the oldest one. Peak counting is not done per sample: callers tick
    the cadence counter and recompute only when it fires.
    """

    __slots__ = ("name", "_window", "_peak_cadence", "peak_count", "samples_since_last_peak_count")

    def __init__(self, name: str, capacity: int, peak_cadence: int) -> None:
        if peak_cadence <= 0:
            raise ValueError("peak_cadence must be positive")
        self.name = str(name)
        self._window: RingBuffer[float] = RingBuffer(capacity)
        self._peak_cadence = int(peak_cadence)
        self.peak_count = 0
        self.samples_since_last_peak_count = 0

    @property
    def capacity(self) -> int:
        return self._window.capacity

    @property
    def peak_cadence(self) -> int:
        return self._peak_cadence

    @property
    def last(self) -> Optional[float]:
        """Newest stored reading, or ``None`` for an empty window."""
        return self._window.last()

    @property
    def window(self) -> list[float]:
        """Copy of the window contents, most recent last."""
        return self._window.to_list()

    def __len__(self) -> int:
        return len(self._window)

    def append(self, value: float) -> None:
        self._window.append(float(value))

    def tick_peak_cadence(self) -> bool:
        """Advance the cadence counter; True once every ``peak_cadence`` calls."""
        self.samples_since_last_peak_count += 1
        if self.samples_since_last_peak_count >= self._peak_cadence:
            self.samples_since_last_peak_count = 0
            return True
        return False

    def recompute_peaks(self, quantization_factor: float) -> int:
        """Count peaks over the current window and store the result."""
        self.peak_count = count_peaks(self._window.to_array(), quantization_factor)
        logger.debug(
            "axis %s: %d peaks over %d readings (q=%g)",
            self.name,
            self.peak_count,
            len(self._window),
            quantization_factor,
        )
        return self.peak_count

    def snapshot(self) -> np.ndarray:
        """Return a copy of the window as a ``float64`` array."""
        return self._window.to_array()

    def __repr__(self) -> str:
        return (
            f"AxisBuffer(name={self.name!r}, len={len(self._window)}, "
            f"capacity={self.capacity}, peak_count={self.peak_count})"
        )
