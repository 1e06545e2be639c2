from __future__ import annotations

import logging
import threading

import pytest

from sensetrack.config import SensorTrackConfig
from sensetrack.config.sensors import SensorLayout, SensorEntry
from sensetrack.core import (
    InvalidFilterParameter,
    SensorTrack,
    ShapeMismatch,
    StreamRouter,
    UnknownSensor,
    build_router,
)


def _router(capacity: int = 5) -> StreamRouter:
    return StreamRouter(
        [
            SensorTrack("Attitude", ("Pitch", "Roll", "Yaw"), capacity=capacity, peak_cadence=30),
            SensorTrack("Gyroscope", ("x", "y", "z"), capacity=capacity, peak_cadence=30),
        ]
    )


def _windows(router: StreamRouter) -> dict[str, list[tuple[float, ...]]]:
    return {snap.sensor_name: [axis.window for axis in snap.axes] for snap in router.snapshot()}


def test_route_forwards_to_matching_track() -> None:
    router = _router()
    router.route("Gyroscope", [0.1, 0.2, 0.3])

    gyro = router.snapshot_track("Gyroscope")
    assert [axis.window for axis in gyro.axes] == [(0.1,), (0.2,), (0.3,)]
    assert all(axis.window == () for axis in router.snapshot_track("Attitude").axes)


def test_unknown_sensor_is_rejected_without_mutation() -> None:
    router = _router()
    router.route("Attitude", [1.0, 2.0, 3.0])
    before = _windows(router)

    with pytest.raises(UnknownSensor) as excinfo:
        router.route("Barometer", [1.0, 2.0, 3.0])
    assert excinfo.value.sensor_id == "Barometer"
    assert isinstance(excinfo.value, KeyError)
    assert _windows(router) == before


def test_route_batch_is_all_or_nothing() -> None:
    router = _router()
    with pytest.raises(ShapeMismatch):
        router.route_batch({"Attitude": [1.0, 2.0, 3.0], "Gyroscope": [1.0]})
    with pytest.raises(UnknownSensor):
        router.route_batch({"Attitude": [1.0, 2.0, 3.0], "Gravity": [0.0, 0.0, -1.0]})
    assert all(axis == () for windows in _windows(router).values() for axis in windows)

    router.route_batch({"Attitude": [1.0, 2.0, 3.0], "Gyroscope": [4.0, 5.0, 6.0]})
    assert _windows(router) == {
        "Attitude": [(1.0,), (2.0,), (3.0,)],
        "Gyroscope": [(4.0,), (5.0,), (6.0,)],
    }


def test_set_filter_config_per_sensor() -> None:
    router = _router()
    cfg = router.set_filter_config("Gyroscope", True, 0.9, 520)

    assert cfg.enabled and cfg.quantization_factor == 520
    assert router.filter_config("Gyroscope") == cfg
    assert router.filter_config("Attitude").enabled is False

    with pytest.raises(InvalidFilterParameter):
        router.set_filter_config("Gyroscope", True, 0.5, 520)
    assert router.filter_config("Gyroscope") == cfg

    with pytest.raises(UnknownSensor):
        router.set_filter_config("Nope", True, 0.9, 10)


def test_apply_filter_config_ignores_bad_updates(caplog: pytest.LogCaptureFixture) -> None:
    router = _router()
    with caplog.at_level(logging.WARNING, logger="sensetrack.core.router"):
        assert router.apply_filter_config("Attitude", True, 0.5, 10) is False
        assert router.apply_filter_config("Missing", True, 0.8, 10) is False
    assert router.filter_config("Attitude").enabled is False
    assert "Ignoring filter update" in caplog.text

    assert router.apply_filter_config("Attitude", True, 0.8, 10) is True
    assert router.filter_config("Attitude").smoothing_factor == 0.8


def test_duplicate_sensor_names_rejected() -> None:
    with pytest.raises(ValueError):
        StreamRouter(
            [
                SensorTrack("Gravity", ("x",), capacity=2, peak_cadence=1),
                SensorTrack("Gravity", ("x",), capacity=2, peak_cadence=1),
            ]
        )


def test_build_router_follows_layout_and_timing() -> None:
    cfg = SensorTrackConfig(
        update_rate_hz=10.0,
        window_seconds=0.5,
        sensors=SensorLayout((SensorEntry("Attitude", ("Pitch", "Roll", "Yaw")), SensorEntry("Magnetometer"))),
    )
    router = build_router(cfg)

    assert router.sensor_ids == ("Attitude", "Magnetometer")
    assert router.axis_names("Attitude") == ("Pitch", "Roll", "Yaw")
    assert router.axis_names("Magnetometer") == ("x", "y", "z")
    assert "Magnetometer" in router and len(router) == 2

    for i in range(8):
        router.route("Magnetometer", [float(i), 0.0, 0.0])
    assert router.snapshot_track("Magnetometer").axes[0].window == (3.0, 4.0, 5.0, 6.0, 7.0)


def test_default_router_has_all_motion_sensors() -> None:
    router = build_router()
    assert router.sensor_ids == (
        "Attitude",
        "Rotation Rate",
        "Gravity",
        "User Acceleration",
        "Acceleration",
        "Gyroscope",
        "Magnetometer",
    )
    assert all(len(axis.window) == 0 for snap in router.snapshot() for axis in snap.axes)


def test_concurrent_producers_keep_windows_bounded() -> None:
    router = _router(capacity=50)
    router.set_filter_config("Gyroscope", True, 0.9, 100)

    def produce(sensor_id: str) -> None:
        for i in range(500):
            router.route(sensor_id, [float(i % 7), float(i % 5), float(i % 3)])

    threads = [threading.Thread(target=produce, args=(name,)) for name in ("Attitude", "Gyroscope") * 2]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5.0)

    for snap in router.snapshot():
        for axis in snap.axes:
            assert len(axis.window) == 50
