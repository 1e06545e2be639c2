"""
Single-writer ingestion: producers on any thread enqueue vector samples and
one background thread drains them into a :class:`StreamRouter`.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from queue import Empty, Full, Queue
from typing import Optional, Tuple

from .errors import SenseTrackError
from .router import SensorId, StreamRouter

logger = logging.getLogger(__name__)

QueuedSample = Tuple[SensorId, Sequence[float]]

_POLL_INTERVAL_S = 0.05


@dataclass
class IngestStats:
    routed: int = 0
    rejected: int = 0
    dropped: int = 0


def _route_one(router: StreamRouter, sensor_id: SensorId, values: Sequence[float], stats: IngestStats) -> None:
    try:
        router.route(sensor_id, values)
    except SenseTrackError as exc:
        stats.rejected += 1
        logger.warning("Rejected sample for %r: %s", sensor_id, exc)
    except Exception:
        stats.rejected += 1
        logger.exception("Failed to route sample for %r: %r", sensor_id, values)
    else:
        stats.routed += 1


def ingest_loop(
    samples: Iterable[QueuedSample],
    router: StreamRouter,
    *,
    stop_event: Optional[threading.Event] = None,
    stats: Optional[IngestStats] = None,
) -> IngestStats:
    """Route ``(sensor_id, values)`` pairs until exhausted or ``stop_event`` is set.

    Rejected samples are logged and counted; the loop keeps going.
    """
    stats = stats if stats is not None else IngestStats()
    for sensor_id, values in samples:
        if stop_event is not None and stop_event.is_set():
            break
        _route_one(router, sensor_id, values, stats)
    return stats


@dataclass
class IngestWorker:
    """Queue plus one drain thread that owns every write into ``router``.

    ``maxsize=0`` gives an unbounded queue. With a bounded queue, a full queue
    drops its oldest pending sample so producers never block.

    ``stats.routed`` and ``stats.rejected`` are only written by whichever
    thread drains the queue; ``stats.dropped`` is written by producers under
    ``_submit_lock``. Samples still queued when the worker stops are routed
    before :meth:`stop` returns (or, without ``join``, before the drain thread
    exits), so :meth:`join` after :meth:`stop` does not hang on them.
    """

    router: StreamRouter
    maxsize: int = 0
    thread_name: str = "SenseTrackIngest"

    stats: IngestStats = field(init=False, default_factory=IngestStats)
    _queue: Queue = field(init=False, repr=False)
    _stop_event: threading.Event = field(init=False, default_factory=threading.Event, repr=False)
    _thread: Optional[threading.Thread] = field(init=False, default=None, repr=False)
    _submit_lock: threading.Lock = field(init=False, default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        self._queue = Queue(maxsize=max(0, int(self.maxsize)))

    # ------------------------------------------------------------------ producers
    def submit(self, sensor_id: SensorId, values: Sequence[float]) -> None:
        """Enqueue one sample; safe to call from any producer thread."""
        item: QueuedSample = (sensor_id, tuple(values))
        # Only the drain side removes items outside this lock, so once the
        # oldest entry is evicted the put below always has room.
        with self._submit_lock:
            try:
                self._queue.put_nowait(item)
                return
            except Full:
                pass
            try:
                self._queue.get_nowait()
            except Empty:
                pass
            else:
                self._queue.task_done()
                self.stats.dropped += 1
            self._queue.put_nowait(item)

    def pending(self) -> int:
        return self._queue.qsize()

    def join(self) -> None:
        """Block until every submitted sample has been routed or rejected."""
        self._queue.join()

    # ------------------------------------------------------------------ lifecycle
    def start(self) -> "IngestWorker":
        if self._thread is not None and self._thread.is_alive():
            return self
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.thread_name, daemon=True)
        self._thread.start()
        return self

    def stop(self, *, join: bool = False, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if join and self._thread is not None:
            self._thread.join(timeout)
        if not self.is_alive():
            self._drain_pending()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _route_queued(self, item: QueuedSample) -> None:
        sensor_id, values = item
        try:
            _route_one(self.router, sensor_id, values, self.stats)
        finally:
            self._queue.task_done()

    def _drain_pending(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except Empty:
                return
            self._route_queued(item)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                item = self._queue.get(timeout=_POLL_INTERVAL_S)
            except Empty:
                continue
            self._route_queued(item)
        self._drain_pending()


def start_ingest(
    router: StreamRouter,
    *,
    maxsize: int = 0,
    thread_name: Optional[str] = None,
) -> IngestWorker:
    """Start a background :class:`IngestWorker` for ``router`` and return it."""
    worker = IngestWorker(router, maxsize=maxsize, thread_name=thread_name or "SenseTrackIngest")
    return worker.start()


__all__ = ["IngestStats", "IngestWorker", "QueuedSample", "ingest_loop", "start_ingest"]
