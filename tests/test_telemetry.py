"""Tests for the queued search-call telemetry sink."""

from __future__ import annotations

import threading
import time

from prometheus_client import REGISTRY

from prospector.protocols import TelemetrySink
from prospector.telemetry import NullTelemetry, QueueTelemetry, TelemetryEvent


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels or {})
    return value or 0.0


class TestTelemetryEvent:
    def test_duration_and_status(self):
        event = TelemetryEvent(start_time=10.0, mode="standard", source_count=3, recorded_at=12.5)
        assert event.duration_s == 2.5
        assert event.succeeded is True

    def test_error_event(self):
        event = TelemetryEvent(start_time=10.0, mode="deep", source_count=0, error_code="TIMEOUT")
        assert event.succeeded is False


class TestQueueTelemetry:
    def test_flush_records_metrics(self):
        labels = {"mode": "deep", "status": "success"}
        before_calls = _sample("prospector_search_calls_total", labels)
        before_sources = _sample("prospector_search_sources_total", {"mode": "deep"})

        sink = QueueTelemetry(maxsize=10)
        try:
            sink.track_call(time.time(), "deep", 4)
            sink.track_call(time.time(), "deep", 2)
            assert sink.flush(timeout=5.0) is True
        finally:
            sink.close()

        assert _sample("prospector_search_calls_total", labels) - before_calls == 2
        assert _sample("prospector_search_sources_total", {"mode": "deep"}) - before_sources == 6

    def test_error_events_counted_separately(self):
        labels = {"mode": "standard", "status": "error"}
        before = _sample("prospector_search_calls_total", labels)

        sink = QueueTelemetry()
        try:
            sink.track_call(time.time(), "standard", 0, "UNKNOWN_ERROR")
            sink.flush(timeout=5.0)
        finally:
            sink.close()

        assert _sample("prospector_search_calls_total", labels) - before == 1

    def test_full_queue_drops_without_blocking(self):
        before = _sample("prospector_telemetry_dropped_total")
        gate = threading.Event()
        sink = QueueTelemetry(maxsize=1)
        sink._record = lambda event: gate.wait(5.0)  # type: ignore[method-assign]

        try:
            sink.track_call(time.time(), "standard", 1)
            deadline = time.monotonic() + 5.0
            while sink._queue.qsize() and time.monotonic() < deadline:
                time.sleep(0.01)

            sink.track_call(time.time(), "standard", 1)  # queued
            sink.track_call(time.time(), "standard", 1)  # dropped
            assert _sample("prospector_telemetry_dropped_total") - before == 1
        finally:
            gate.set()
            sink.close()

    def test_events_after_close_are_dropped(self):
        before = _sample("prospector_telemetry_dropped_total")
        sink = QueueTelemetry()
        sink.close()
        sink.close()

        sink.track_call(time.time(), "standard", 1)

        assert _sample("prospector_telemetry_dropped_total") - before == 1


class TestNullTelemetry:
    def test_satisfies_sink(self):
        assert isinstance(NullTelemetry(), TelemetrySink)

    def test_discards(self):
        assert NullTelemetry().track_call(time.time(), "standard", 1) is None
