"""Sensor identities and their axis layouts.

This module is the single source of truth for which sensors exist and in
which order their axes are stored. Track construction and sample routing both
read the same :class:`SensorLayout`, so component ``i`` of an incoming vector
always lands in the axis built at position ``i``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

VECTOR_AXES: Tuple[str, ...] = ("x", "y", "z")
ATTITUDE_AXES: Tuple[str, ...] = ("Pitch", "Roll", "Yaw")


@dataclass(frozen=True)
class SensorEntry:
    """One sensor and its ordered axis names."""

    name: str
    axes: Tuple[str, ...] = VECTOR_AXES

    def __post_init__(self) -> None:
        name = str(self.name).strip()
        if not name:
            raise ValueError("sensor name must be non-empty")
        axes = tuple(str(axis) for axis in self.axes)
        if not axes:
            raise ValueError(f"sensor {name!r} needs at least one axis")
        if len(set(axes)) != len(axes):
            raise ValueError(f"sensor {name!r} has duplicate axis names: {list(axes)}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "axes", axes)


@dataclass(frozen=True)
class SensorLayout:
    """Ordered, duplicate-free collection of :class:`SensorEntry`."""

    sensors: Tuple[SensorEntry, ...]

    def __post_init__(self) -> None:
        sensors = tuple(self.sensors)
        names = [sensor.name for sensor in sensors]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate sensor names in layout: {duplicates}")
        object.__setattr__(self, "sensors", sensors)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(sensor.name for sensor in self.sensors)

    def __iter__(self):
        return iter(self.sensors)

    def __len__(self) -> int:
        return len(self.sensors)

    def get(self, name: str) -> SensorEntry | None:
        for sensor in self.sensors:
            if sensor.name == name:
                return sensor
        return None

    @classmethod
    def from_mapping(cls, entries: Sequence[Any] | Mapping[str, Any] | None) -> "SensorLayout":
        """
        Build a layout from YAML data.

        Supported shapes::

            sensors:
              - name: Attitude
                axes: [Pitch, Roll, Yaw]
              - Gyroscope            # axes default to x, y, z

            sensors:
              Attitude: [Pitch, Roll, Yaw]
              Gyroscope: null

        An empty or missing block yields :data:`DEFAULT_SENSOR_LAYOUT`.
        """
        if not entries:
            return DEFAULT_SENSOR_LAYOUT

        parsed: List[SensorEntry] = []
        if isinstance(entries, Mapping):
            for name, axes in entries.items():
                parsed.append(SensorEntry(str(name), tuple(axes) if axes else VECTOR_AXES))
            return cls(tuple(parsed))

        for entry in entries:
            if isinstance(entry, str):
                parsed.append(SensorEntry(entry))
            elif isinstance(entry, Mapping):
                if "name" not in entry:
                    raise ValueError(f"sensor entry missing 'name': {dict(entry)!r}")
                axes = entry.get("axes") or VECTOR_AXES
                if isinstance(axes, str):
                    raise ValueError(f"axes for {entry['name']!r} must be a list, got {axes!r}")
                parsed.append(SensorEntry(str(entry["name"]), tuple(axes)))
            else:
                raise ValueError(f"unsupported sensor entry: {entry!r}")
        return cls(tuple(parsed))

    def to_mapping(self) -> List[Dict[str, Any]]:
        """Serialize back into the list form accepted by :meth:`from_mapping`."""
        return [{"name": sensor.name, "axes": list(sensor.axes)} for sensor in self.sensors]


DEFAULT_SENSOR_LAYOUT = SensorLayout(
    (
        SensorEntry("Attitude", ATTITUDE_AXES),
        SensorEntry("Rotation Rate"),
        SensorEntry("Gravity"),
        SensorEntry("User Acceleration"),
        SensorEntry("Acceleration"),
        SensorEntry("Gyroscope"),
        SensorEntry("Magnetometer"),
    )
)
