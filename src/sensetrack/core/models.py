"""Shared dataclasses for filter settings and read-only track snapshots."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidFilterParameter

SMOOTHING_FACTOR_RANGE: Tuple[float, float] = (0.75, 1.0)
QUANTIZATION_FACTOR_RANGE: Tuple[float, float] = (1.0, 600.0)


def _check_range(parameter: str, value: object, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidFilterParameter(parameter, value, low, high) from None
    # NaN fails both comparisons and is rejected here as well.
    if not (low <= number <= high):
        raise InvalidFilterParameter(parameter, value, low, high)
    return number


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Per-sensor filter settings, replaced as a whole on every update."""

    enabled: bool = False
    smoothing_factor: float = 0.75
    quantization_factor: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled", bool(self.enabled))
        object.__setattr__(
            self,
            "smoothing_factor",
            _check_range("smoothing_factor", self.smoothing_factor, SMOOTHING_FACTOR_RANGE),
        )
        object.__setattr__(
            self,
            "quantization_factor",
            _check_range("quantization_factor", self.quantization_factor, QUANTIZATION_FACTOR_RANGE),
        )

    @classmethod
    def clamped(cls, enabled: bool, smoothing_factor: float, quantization_factor: float) -> "FilterConfig":
        """Build a config with both factors clamped into range (used for defaults)."""
        def _clamp(value: float, bounds: Tuple[float, float]) -> float:
            low, high = bounds
            try:
                number = float(value)
            except (TypeError, ValueError):
                return low
            if math.isnan(number):
                return low
            return max(low, min(high, number))

        return cls(
            enabled=enabled,
            smoothing_factor=_clamp(smoothing_factor, SMOOTHING_FACTOR_RANGE),
            quantization_factor=_clamp(quantization_factor, QUANTIZATION_FACTOR_RANGE),
        )


@dataclass(frozen=True, slots=True)
class AxisSnapshot:
    name: str
    window: tuple[float, ...]
    peak_count: int

    def as_array(self) -> np.ndarray:
        return np.asarray(self.window, dtype=np.float64)


@dataclass(frozen=True, slots=True)
class TrackSnapshot:
    """Point-in-time copy of one sensor track for display code."""

    sensor_name: str
    axes: tuple[AxisSnapshot, ...]
    filter: FilterConfig

    @property
    def filter_enabled(self) -> bool:
        return self.filter.enabled

    @property
    def smoothing_factor(self) -> float:
        return self.filter.smoothing_factor

    @property
    def quantization_factor(self) -> float:
        return self.filter.quantization_factor

    @property
    def axis_names(self) -> tuple[str, ...]:
        return tuple(axis.name for axis in self.axes)

    def axis(self, name: str) -> AxisSnapshot:
        for axis in self.axes:
            if axis.name == name:
                return axis
        raise KeyError(name)
