"""Configuration objects and helpers for sensetrack.

A YAML file describes the shared stream timing, the initial filter settings,
and the sensor layout (see :mod:`sensors`). The typed dataclasses in
:mod:`runtime` are what :func:`sensetrack.core.build_router` consumes.
"""

from .runtime import SensorTrackConfig, config_from_mapping, load_config, save_config
from .sensors import DEFAULT_SENSOR_LAYOUT, SensorLayout, SensorEntry

__all__ = [
    "SensorTrackConfig",
    "config_from_mapping",
    "load_config",
    "save_config",
    "SensorLayout",
    "SensorEntry",
    "DEFAULT_SENSOR_LAYOUT",
]
