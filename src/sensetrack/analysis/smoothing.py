"""Exponential low-pass smoothing."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal


def smooth(previous: Optional[float], new_raw: float, factor: float) -> float:
    """
    First-order exponential low-pass step.

    Parameters
    ----------
    previous:
        Last value actually emitted (the newest entry in the axis window), or
        ``None`` when nothing has been emitted yet.
    new_raw:
        Incoming raw reading.
    factor:
        Weight given to ``previous``. Values near 1.0 smooth heavily; 0.75 is
        the lightest smoothing the tracks accept. No range check happens here.

    Returns
    -------
    float
        ``new_raw`` for the first sample, otherwise
        ``factor * previous + (1 - factor) * new_raw``.
    """
    if previous is None:
        return float(new_raw)
    return factor * previous + (1.0 - factor) * new_raw


def smooth_series(readings: ArrayLike, factor: float) -> np.ndarray:
    """
    Apply :func:`smooth` recursively to a whole recorded series.

    The first reading passes through unchanged and seeds the filter state,
    exactly as the streaming path does for a fresh window.
    """
    data = np.asarray(readings, dtype=float).reshape(-1)
    if data.size == 0:
        return np.empty(0, dtype=np.float64)

    f = float(factor)
    b = np.array([1.0 - f])
    a = np.array([1.0, -f])
    zi = np.array([f * data[0]])
    tail, _ = signal.lfilter(b, a, data[1:], zi=zi)
    return np.concatenate(([data[0]], tail))
