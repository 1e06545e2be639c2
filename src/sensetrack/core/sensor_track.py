"""Per-sensor group of axis buffers with its filter configuration."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..analysis.smoothing import smooth
from .axis_buffer import AxisBuffer
from .errors import ShapeMismatch
from .models import AxisSnapshot, FilterConfig, TrackSnapshot

logger = logging.getLogger(__name__)


class SensorTrack:
    """
    Axis buffers for one named sensor.

    Component ``i`` of every ingested vector goes to ``axes[i]``; the axis
    order is fixed when the track is built and never changes afterwards.

    Peak counts are only refreshed while filtering is enabled. Counting local
    maxima on the raw signal is not meaningful here, so an unfiltered track
    keeps whatever peak count it last had.

    Instances are not thread-safe on their own; :class:`StreamRouter` owns
    them and serializes every call.
    """

    def __init__(
        self,
        sensor_name: str,
        axis_names: Iterable[str],
        *,
        capacity: int,
        peak_cadence: int,
        filter_config: FilterConfig | None = None,
    ) -> None:
        names = [str(name) for name in axis_names]
        if not names:
            raise ValueError(f"sensor {sensor_name!r} needs at least one axis")
        if len(set(names)) != len(names):
            raise ValueError(f"sensor {sensor_name!r} has duplicate axis names: {names}")

        self.sensor_name = str(sensor_name)
        self.axes: tuple[AxisBuffer, ...] = tuple(
            AxisBuffer(name, capacity, peak_cadence) for name in names
        )
        self.filter = filter_config or FilterConfig()

    # ------------------------------------------------------------------ config
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

    def set_filter_config(self, enabled: bool, smoothing_factor: float, quantization_factor: float) -> FilterConfig:
        """
        Replace all three filter settings at once.

        Raises :class:`InvalidFilterParameter` before touching anything when
        either factor is out of range. Stored readings and peak counts are not
        recomputed; the new settings apply from the next :meth:`ingest`.
        """
        self.filter = FilterConfig(
            enabled=enabled,
            smoothing_factor=smoothing_factor,
            quantization_factor=quantization_factor,
        )
        logger.debug("%s: filter config now %s", self.sensor_name, self.filter)
        return self.filter

    # ------------------------------------------------------------------ ingest
    def coerce_sample(self, vector_sample: Sequence[float]) -> list[float]:
        """Validate ``vector_sample`` against the axes and return it as floats."""
        expected = len(self.axes)
        try:
            got = len(vector_sample)
        except TypeError:
            raise ShapeMismatch(self.sensor_name, expected, None, "sample is not a sequence") from None
        if got != expected:
            raise ShapeMismatch(self.sensor_name, expected, got)
        try:
            return [float(value) for value in vector_sample]
        except (TypeError, ValueError) as exc:
            raise ShapeMismatch(self.sensor_name, expected, got, f"non-numeric component ({exc})") from None

    def ingest(self, vector_sample: Sequence[float]) -> None:
        values = self.coerce_sample(vector_sample)
        self.ingest_values(values)

    def ingest_values(self, values: Sequence[float]) -> None:
        """Store values already checked by :meth:`coerce_sample`."""
        cfg = self.filter
        for axis, raw in zip(self.axes, values):
            if cfg.enabled:
                axis.append(smooth(axis.last, raw, cfg.smoothing_factor))
                if axis.tick_peak_cadence():
                    axis.recompute_peaks(cfg.quantization_factor)
            else:
                axis.append(raw)

    # ------------------------------------------------------------------ read
    def snapshot(self) -> TrackSnapshot:
        return TrackSnapshot(
            sensor_name=self.sensor_name,
            axes=tuple(
                AxisSnapshot(name=axis.name, window=tuple(axis.window), peak_count=axis.peak_count)
                for axis in self.axes
            ),
            filter=self.filter,
        )

    def __repr__(self) -> str:
        return f"SensorTrack(sensor_name={self.sensor_name!r}, axes={self.axis_names}, filter={self.filter})"
