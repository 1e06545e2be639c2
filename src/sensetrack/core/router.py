"""Single ingestion entry point that fans vector samples out to sensor tracks."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import Dict, List, Tuple

from .errors import InvalidFilterParameter, UnknownSensor
from .models import FilterConfig, TrackSnapshot
from .sensor_track import SensorTrack

logger = logging.getLogger(__name__)

SensorId = str


class StreamRouter:
    """Mapping of sensor id -> :class:`SensorTrack` behind one lock.

    The set of tracks is fixed at construction. Every mutation (samples and
    filter updates) and every read goes through the same RLock, so an axis
    never shows a half-applied append/trim or tick/recompute, and readers
    only ever receive snapshot copies.
    """

    def __init__(self, tracks: Iterable[SensorTrack]) -> None:
        table: Dict[SensorId, SensorTrack] = {}
        for track in tracks:
            if track.sensor_name in table:
                raise ValueError(f"duplicate sensor name {track.sensor_name!r}")
            table[track.sensor_name] = track
        self._tracks: Mapping[SensorId, SensorTrack] = table
        self._lock = threading.RLock()
        logger.info("StreamRouter ready with %d sensors: %s", len(table), ", ".join(table))

    # ------------------------------------------------------------------ lookup
    @property
    def sensor_ids(self) -> Tuple[SensorId, ...]:
        return tuple(self._tracks)

    def __contains__(self, sensor_id: object) -> bool:
        return sensor_id in self._tracks

    def __len__(self) -> int:
        return len(self._tracks)

    def axis_names(self, sensor_id: SensorId) -> Tuple[str, ...]:
        return self._track(sensor_id).axis_names

    def _track(self, sensor_id: SensorId) -> SensorTrack:
        track = self._tracks.get(sensor_id)
        if track is None:
            raise UnknownSensor(sensor_id, tuple(self._tracks))
        return track

    # ------------------------------------------------------------------ ingest
    def route(self, sensor_id: SensorId, vector_sample: Sequence[float]) -> None:
        """Forward one vector sample to the track registered as ``sensor_id``."""
        track = self._track(sensor_id)
        with self._lock:
            track.ingest(vector_sample)

    def route_batch(self, samples: Mapping[SensorId, Sequence[float]]) -> None:
        """
        Ingest several sensors' samples as one unit.

        Every id and shape is checked before any track is touched, so a bad
        entry rejects the whole batch.
        """
        prepared: List[Tuple[SensorTrack, List[float]]] = []
        for sensor_id, vector_sample in samples.items():
            track = self._track(sensor_id)
            prepared.append((track, track.coerce_sample(vector_sample)))
        with self._lock:
            for track, values in prepared:
                track.ingest_values(values)

    # ------------------------------------------------------------------ config
    def set_filter_config(
        self,
        sensor_id: SensorId,
        enabled: bool,
        smoothing_factor: float,
        quantization_factor: float,
    ) -> FilterConfig:
        track = self._track(sensor_id)
        with self._lock:
            return track.set_filter_config(enabled, smoothing_factor, quantization_factor)

    def apply_filter_config(
        self,
        sensor_id: SensorId,
        enabled: bool,
        smoothing_factor: float,
        quantization_factor: float,
    ) -> bool:
        """
        UI-facing variant of :meth:`set_filter_config`.

        A rejected update is logged and ignored; the previous configuration
        stays in effect. Returns True when the update was applied.
        """
        try:
            self.set_filter_config(sensor_id, enabled, smoothing_factor, quantization_factor)
        except (InvalidFilterParameter, UnknownSensor) as exc:
            logger.warning("Ignoring filter update for %r: %s", sensor_id, exc)
            return False
        return True

    def filter_config(self, sensor_id: SensorId) -> FilterConfig:
        track = self._track(sensor_id)
        with self._lock:
            return track.filter

    # ------------------------------------------------------------------ read
    def snapshot(self) -> Tuple[TrackSnapshot, ...]:
        """Return copies of every track, in registration order."""
        with self._lock:
            return tuple(track.snapshot() for track in self._tracks.values())

    def snapshot_track(self, sensor_id: SensorId) -> TrackSnapshot:
        track = self._track(sensor_id)
        with self._lock:
            return track.snapshot()


__all__ = ["StreamRouter", "SensorId"]
