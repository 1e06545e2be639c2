"""Local-maxima counting on a quantized window."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def quantize(readings: ArrayLike, quantization_factor: float) -> np.ndarray:
    """
    Scale ``readings`` by ``quantization_factor`` and floor them to integers.

    Only changes large enough to cross an integer boundary after scaling
    register as a change of direction, which keeps small noise-driven
    reversals from being counted as peaks.
    """
    data = np.asarray(readings, dtype=float).reshape(-1)
    if data.size == 0:
        return np.empty(0, dtype=np.int64)
    return np.floor(data * float(quantization_factor)).astype(np.int64)


def count_peaks(readings: ArrayLike, quantization_factor: float) -> int:
    """
    Count local maxima in ``readings`` after quantization.

    The scan starts at the first quantized level and only counts a peak once
    a rise has been seen and is followed by a drop, so monotonic windows of
    either sign count 0. Equal neighbours leave the direction as it was, so
    a flat top followed by a descent counts once, and two ascents separated
    only by a plateau count once as well.

    Parameters
    ----------
    readings:
        Window contents, oldest first.
    quantization_factor:
        Scale applied before flooring; the only noise-rejection knob.

    Returns
    -------
    int
        Number of peaks over the whole window (not a rate).
    """
    levels = quantize(readings, quantization_factor)
    if levels.size < 2:
        return 0

    first, *rest = levels.tolist()
    ascending = False
    last = first
    peaks = 0
    for current in rest:
        if ascending and last > current:
            peaks += 1
            ascending = False
        elif last < current:
            ascending = True
        last = current
    return peaks


def peaks_per_second(peak_count: int, sample_count: int, update_rate_hz: float) -> float:
    """Convert a window peak count into a rate using the window's time span."""
    if sample_count <= 0 or update_rate_hz <= 0:
        return 0.0
    span_s = sample_count / float(update_rate_hz)
    return peak_count / span_s
