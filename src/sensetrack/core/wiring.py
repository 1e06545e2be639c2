"""Factory helpers that build a :class:`StreamRouter` from configuration."""

from __future__ import annotations

from ..config import SensorTrackConfig
from ..config.sensors import SensorLayout
from .router import StreamRouter
from .sensor_track import SensorTrack


def build_tracks(cfg: SensorTrackConfig) -> list[SensorTrack]:
    """Create one :class:`SensorTrack` per entry of ``cfg.sensors``, in layout order."""
    normalized = cfg.sanitized()
    capacity = normalized.capacity()
    cadence = normalized.resolved_peak_cadence()
    initial = normalized.initial_filter()
    layout: SensorLayout = normalized.sensors
    return [
        SensorTrack(
            sensor.name,
            sensor.axes,
            capacity=capacity,
            peak_cadence=cadence,
            filter_config=initial,
        )
        for sensor in layout
    ]


def build_router(cfg: SensorTrackConfig | None = None) -> StreamRouter:
    """
    Build the fixed set of sensor tracks and the router that feeds them.

    Parameters
    ----------
    cfg:
        Runtime configuration (usually loaded from YAML). Defaults to
        :class:`SensorTrackConfig` with the built-in sensor layout.
    """
    return StreamRouter(build_tracks(cfg or SensorTrackConfig()))


__all__ = ["build_router", "build_tracks"]
