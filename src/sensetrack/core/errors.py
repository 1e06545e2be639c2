"""Errors raised by the streaming core.

All of them are caller-attributable and recoverable: the operation that
raises leaves every track exactly as it was before the call.
"""

from __future__ import annotations

from typing import Sequence


class SenseTrackError(Exception):
    """Base class for sensetrack errors."""


class UnknownSensor(SenseTrackError, KeyError):
    """A sample or config update named a sensor that was never registered."""

    def __init__(self, sensor_id: str, known: Sequence[str] = ()) -> None:
        self.sensor_id = sensor_id
        self.known = tuple(known)
        super().__init__(sensor_id)

    def __str__(self) -> str:
        known = ", ".join(repr(name) for name in self.known) or "none"
        return f"Unknown sensor {self.sensor_id!r} (registered: {known})"


class ShapeMismatch(SenseTrackError, ValueError):
    """A vector sample does not fit the track's axes."""

    def __init__(self, sensor_name: str, expected: int, got: int | None, detail: str = "") -> None:
        self.sensor_name = sensor_name
        self.expected = expected
        self.got = got
        if not detail:
            detail = f"expected {expected} components, got {got}"
        super().__init__(f"{sensor_name}: {detail}")


class InvalidFilterParameter(SenseTrackError, ValueError):
    """A filter factor lies outside its documented range."""

    def __init__(self, parameter: str, value: object, low: float, high: float) -> None:
        self.parameter = parameter
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{parameter} must be within [{low:g}, {high:g}], got {value!r}")


__all__ = [
    "SenseTrackError",
    "UnknownSensor",
    "ShapeMismatch",
    "InvalidFilterParameter",
]
