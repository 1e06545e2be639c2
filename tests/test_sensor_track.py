import math

import pytest

from sensetrack.core.errors import InvalidFilterParameter, ShapeMismatch
from sensetrack.core.models import FilterConfig
from sensetrack.core.sensor_track import SensorTrack


def _track(axes=("x", "y", "z"), capacity: int = 150, cadence: int = 30, **filter_kwargs) -> SensorTrack:
    cfg = FilterConfig(**filter_kwargs) if filter_kwargs else None
    return SensorTrack("Gyroscope", axes, capacity=capacity, peak_cadence=cadence, filter_config=cfg)


def test_unfiltered_window_slides_and_peaks_stay_zero() -> None:
    track = _track(axes=("x",), capacity=3)
    for value in (1.0, 2.0, 3.0, 4.0):
        track.ingest([value])

    (axis,) = track.axes
    assert axis.window == [2.0, 3.0, 4.0]
    assert axis.peak_count == 0


def test_components_map_to_axes_by_position() -> None:
    track = _track()
    track.ingest([1.0, 2.0, 3.0])
    track.ingest((4, 5, 6))
    assert [axis.window for axis in track.axes] == [[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]]


def test_filtering_smooths_recursively_on_stored_values() -> None:
    track = _track(axes=("x",), enabled=True, smoothing_factor=0.75)
    track.ingest([8.0])
    track.ingest([0.0])
    track.ingest([0.0])
    assert track.axes[0].window == [8.0, 6.0, 4.5]


def test_toggling_filter_does_not_rewrite_history() -> None:
    track = _track(axes=("x",))
    track.ingest([10.0])
    track.set_filter_config(True, 0.75, 1.0)
    track.ingest([2.0])
    track.set_filter_config(False, 0.75, 1.0)
    track.ingest([7.0])
    assert track.axes[0].window == [10.0, 8.0, 7.0]


def test_peaks_recomputed_on_cadence_only_when_filtering() -> None:
    pattern = [0.0, 10.0] * 5
    enabled = _track(axes=("x",), cadence=10, enabled=True, smoothing_factor=0.75, quantization_factor=1.0)
    disabled = _track(axes=("x",), cadence=10)

    for value in pattern[:-1]:
        enabled.ingest([value])
    assert enabled.axes[0].peak_count == 0
    enabled.ingest([pattern[-1]])
    assert enabled.axes[0].peak_count > 0

    for value in pattern * 3:
        disabled.ingest([value])
    assert disabled.axes[0].peak_count == 0
    assert disabled.axes[0].samples_since_last_peak_count == 0


def test_shape_mismatch_is_rejected_without_mutation() -> None:
    track = _track()
    track.ingest([1.0, 1.0, 1.0])
    with pytest.raises(ShapeMismatch) as excinfo:
        track.ingest([1.0, 2.0])
    assert excinfo.value.expected == 3
    assert excinfo.value.got == 2
    assert all(axis.window == [1.0] for axis in track.axes)


def test_non_numeric_component_is_rejected_without_mutation() -> None:
    track = _track()
    with pytest.raises(ShapeMismatch):
        track.ingest([1.0, 2.0, "nope"])
    assert all(len(axis) == 0 for axis in track.axes)


def test_invalid_filter_config_keeps_previous_settings() -> None:
    track = _track(enabled=True, smoothing_factor=0.8, quantization_factor=50)
    before = track.filter

    with pytest.raises(InvalidFilterParameter):
        track.set_filter_config(True, 0.5, 50)
    with pytest.raises(InvalidFilterParameter):
        track.set_filter_config(False, 0.9, 601)
    with pytest.raises(InvalidFilterParameter):
        track.set_filter_config(False, math.nan, 10)

    assert track.filter is before
    assert track.smoothing_factor == 0.8
    assert track.quantization_factor == 50


def test_filter_config_bounds_are_inclusive() -> None:
    track = _track()
    track.set_filter_config(True, 0.75, 1)
    track.set_filter_config(True, 1.0, 600)
    assert track.filter == FilterConfig(True, 1.0, 600.0)


def test_construction_rejects_bad_axes() -> None:
    with pytest.raises(ValueError):
        _track(axes=())
    with pytest.raises(ValueError):
        _track(axes=("x", "x"))


def test_snapshot_is_a_copy() -> None:
    track = _track(axes=("Pitch", "Roll", "Yaw"))
    track.ingest([0.1, 0.2, 0.3])
    snap = track.snapshot()
    track.ingest([0.4, 0.5, 0.6])

    assert snap.sensor_name == "Gyroscope"
    assert snap.axis_names == ("Pitch", "Roll", "Yaw")
    assert snap.axis("Roll").window == (0.2,)
    assert snap.filter_enabled is False
