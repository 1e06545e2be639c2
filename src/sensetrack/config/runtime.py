"""Runtime configuration for the sensor tracking core."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping

import yaml

from ..core.models import FilterConfig
from .sensors import DEFAULT_SENSOR_LAYOUT, SensorLayout


def _positive_float(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number) or number <= 0.0:
        return fallback
    return number


@dataclass(slots=True)
class SensorTrackConfig:
    """
    Stream timing, initial filter settings, and the sensor layout.

    The defaults describe ~30 Hz producers with a 5 s window and one peak
    evaluation per second.
    """

    update_rate_hz: float = 30.0
    window_seconds: float = 5.0
    peak_cadence: int | None = None

    filter_enabled: bool = False
    smoothing_factor: float = 0.75
    quantization_factor: float = 1.0

    sensors: SensorLayout = field(default_factory=lambda: DEFAULT_SENSOR_LAYOUT)

    def capacity(self) -> int:
        """Window length in samples: ``round(update_rate_hz * window_seconds)``."""
        return max(1, int(round(self.update_rate_hz * self.window_seconds)))

    def resolved_peak_cadence(self) -> int:
        """Samples between peak evaluations; one evaluation per second by default."""
        if self.peak_cadence is not None:
            return max(1, int(self.peak_cadence))
        return max(1, int(round(self.update_rate_hz)))

    def initial_filter(self) -> FilterConfig:
        return FilterConfig.clamped(self.filter_enabled, self.smoothing_factor, self.quantization_factor)

    def sanitized(self) -> SensorTrackConfig:
        """Return a copy with derived limits applied."""
        cadence = self.peak_cadence
        if cadence is not None:
            cadence = max(1, int(cadence))
        initial = self.initial_filter()
        return SensorTrackConfig(
            update_rate_hz=_positive_float(self.update_rate_hz, 30.0),
            window_seconds=_positive_float(self.window_seconds, 5.0),
            peak_cadence=cadence,
            filter_enabled=initial.enabled,
            smoothing_factor=initial.smoothing_factor,
            quantization_factor=initial.quantization_factor,
            sensors=self.sensors,
        )

    def to_mapping(self) -> Dict[str, Any]:
        """Serialize into the nested mapping accepted by :func:`config_from_mapping`."""
        stream: Dict[str, Any] = {
            "update_rate_hz": float(self.update_rate_hz),
            "window_seconds": float(self.window_seconds),
        }
        if self.peak_cadence is not None:
            stream["peak_cadence"] = int(self.peak_cadence)
        return {
            "stream": stream,
            "filter": {
                "enabled": bool(self.filter_enabled),
                "smoothing_factor": float(self.smoothing_factor),
                "quantization_factor": float(self.quantization_factor),
            },
            "sensors": self.sensors.to_mapping(),
        }


_FILTER_KEYS = {
    "enabled": "filter_enabled",
    "smoothing_factor": "smoothing_factor",
    "quantization_factor": "quantization_factor",
}
_STREAM_KEYS = {"update_rate_hz", "window_seconds", "peak_cadence"}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten the ``stream`` and ``filter`` blocks into dataclass field names."""
    merged: MutableMapping[str, Any] = {}
    for key in _STREAM_KEYS:
        if key in data:
            merged[key] = data[key]

    stream = data.get("stream")
    if isinstance(stream, Mapping):
        for key in _STREAM_KEYS & stream.keys():
            merged[key] = stream[key]

    flt = data.get("filter")
    if isinstance(flt, Mapping):
        for key, field_name in _FILTER_KEYS.items():
            if key in flt:
                merged[field_name] = flt[key]
    return merged


def config_from_mapping(data: Mapping[str, Any] | None) -> SensorTrackConfig:
    """Build :class:`SensorTrackConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return SensorTrackConfig()
    payload = _normalize_mapping(data)
    sensors = SensorLayout.from_mapping(data.get("sensors"))
    return SensorTrackConfig(sensors=sensors, **payload).sanitized()


def load_config(path: str | Path | None) -> SensorTrackConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`SensorTrackConfig`.
    """
    if path is None:
        return SensorTrackConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return SensorTrackConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


def save_config(path: str | Path, cfg: SensorTrackConfig) -> None:
    """Write ``cfg`` to ``path`` as YAML."""
    cfg_path = Path(path)
    if cfg_path.parent and not cfg_path.parent.exists():
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
    with cfg_path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(cfg.to_mapping(), fh, default_flow_style=False, sort_keys=False)


__all__ = ["SensorTrackConfig", "config_from_mapping", "load_config", "save_config"]
