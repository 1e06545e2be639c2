"""sensetrack: sliding-window tracking, smoothing and peak counting for multi-axis sensor streams."""

# core first: config.runtime depends on core.models
from .core import (
    AxisBuffer,
    FilterConfig,
    InvalidFilterParameter,
    SensorTrack,
    ShapeMismatch,
    StreamRouter,
    UnknownSensor,
    build_router,
)
from .config import SensorTrackConfig, load_config

__all__ = [
    "AxisBuffer",
    "FilterConfig",
    "SensorTrack",
    "StreamRouter",
    "SensorTrackConfig",
    "UnknownSensor",
    "ShapeMismatch",
    "InvalidFilterParameter",
    "build_router",
    "load_config",
]
