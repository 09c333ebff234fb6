"""Fire-and-forget search call telemetry.

``track_call`` only enqueues; a daemon worker thread drains the queue and
records Prometheus metrics, so a slow or broken sink never delays a
discovery request.
"""

from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass, field

import structlog

from prospector.metrics import (
    search_call_duration_seconds,
    search_calls_total,
    search_sources_total,
    telemetry_dropped_total,
)

logger = structlog.get_logger()

_STOP = object()


@dataclass(frozen=True)
class TelemetryEvent:
    start_time: float
    mode: str
    source_count: int
    error_code: str | None = None
    recorded_at: float = field(default_factory=time.time)

    @property
    def duration_s(self) -> float:
        return max(0.0, self.recorded_at - self.start_time)

    @property
    def succeeded(self) -> bool:
        return self.error_code is None


class QueueTelemetry:
    """Bounded, non-blocking ``TelemetrySink`` backed by a worker thread.

    Events pushed while the queue is full, or after ``close()``, are
    dropped and counted in ``prospector_telemetry_dropped_total``.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        self._queue: queue.Queue[object] = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self._worker = threading.Thread(
            target=self._drain, name="prospector-telemetry", daemon=True
        )
        self._worker.start()

    def track_call(
        self,
        start_time: float,
        mode: str,
        source_count: int,
        error_info: str | None = None,
    ) -> None:
        try:
            if self._closed.is_set():
                telemetry_dropped_total.inc()
                return
            event = TelemetryEvent(start_time, mode, source_count, error_info)
            self._queue.put_nowait(event)
        except queue.Full:
            telemetry_dropped_total.inc()
        except Exception as exc:
            # track_call must never break the caller
            telemetry_dropped_total.inc()
            logger.debug("telemetry_enqueue_failed", error=str(exc))

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every queued event has been recorded.

        Returns False if *timeout* elapsed first.
        """
        if timeout is None:
            self._queue.join()
            return True
        deadline = time.monotonic() + timeout
        while self._queue.unfinished_tasks:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def close(self, timeout: float = 5.0) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        self._queue.put(_STOP)
        self._worker.join(timeout)

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                if isinstance(item, TelemetryEvent):
                    self._record(item)
            except Exception:
                logger.exception("telemetry_record_failed")
            finally:
                self._queue.task_done()

    def _record(self, event: TelemetryEvent) -> None:
        status = "success" if event.succeeded else "error"
        search_calls_total.labels(mode=event.mode, status=status).inc()
        search_call_duration_seconds.labels(mode=event.mode).observe(event.duration_s)
        if event.succeeded:
            search_sources_total.labels(mode=event.mode).inc(event.source_count)
        logger.debug(
            "search_call_tracked",
            mode=event.mode,
            status=status,
            source_count=event.source_count,
            duration_ms=int(event.duration_s * 1000),
            error_code=event.error_code,
        )


class NullTelemetry:
    """``TelemetrySink`` that discards every event."""

    def track_call(
        self,
        start_time: float,
        mode: str,
        source_count: int,
        error_info: str | None = None,
    ) -> None:
        return None
