"""Signal helpers (smoothing and peak counting).

Modules here are pure functions over floats and NumPy arrays with no
threading or state, so they can be reused on recorded data as well as in the
streaming path.
"""

from .peaks import count_peaks, peaks_per_second, quantize
from .smoothing import smooth, smooth_series

__all__ = ["count_peaks", "peaks_per_second", "quantize", "smooth", "smooth_series"]
