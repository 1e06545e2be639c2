"""Core streaming state: axis windows, sensor tracks, and the router.

This package sits between the sensor producers and display code. Producers
push vector samples through :class:`StreamRouter` (directly or via an
:class:`IngestWorker`), and readers take :class:`TrackSnapshot` copies.
"""

# Data structures
from .ringbuffer import RingBuffer
from .axis_buffer import AxisBuffer
from .models import AxisSnapshot, FilterConfig, TrackSnapshot
from .errors import InvalidFilterParameter, SenseTrackError, ShapeMismatch, UnknownSensor

# Tracks, routing and wiring helpers
from .sensor_track import SensorTrack
from .router import StreamRouter
from .wiring import build_router, build_tracks
from .ingest import IngestStats, IngestWorker, ingest_loop, start_ingest

__all__ = [
    "RingBuffer",
    "AxisBuffer",
    "AxisSnapshot",
    "FilterConfig",
    "TrackSnapshot",
    "SenseTrackError",
    "UnknownSensor",
    "ShapeMismatch",
    "InvalidFilterParameter",
    "SensorTrack",
    "StreamRouter",
    "build_router",
    "build_tracks",
    "IngestStats",
    "IngestWorker",
    "ingest_loop",
    "start_ingest",
]
