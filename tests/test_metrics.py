"""Tests for Prometheus metrics definitions and instrumentation."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

if TYPE_CHECKING:
    from fastapi import FastAPI

from prospector.metrics import (
    circuit_breaker_state,
    discovery_duration_seconds,
    discovery_requests_total,
    prospects_found_total,
    retry_attempts_total,
    retry_exhausted_total,
    search_calls_total,
)


class TestMetricDefinitions:
    """Verify metric definitions exist with the expected names.

    Note: prometheus_client Counter strips '_total' from _name internally
    (it's re-added in exported samples).
    """

    def test_discovery_requests_counter(self):
        assert discovery_requests_total._name == "prospector_discovery_requests"
        assert "outcome" in discovery_requests_total._labelnames

    def test_discovery_duration_histogram(self):
        assert discovery_duration_seconds._name == "prospector_discovery_duration_seconds"

    def test_prospects_found_counter(self):
        assert prospects_found_total._name == "prospector_prospects_found"
        assert "confidence" in prospects_found_total._labelnames

    def test_search_calls_counter(self):
        assert search_calls_total._name == "prospector_search_calls"
        assert search_calls_total._labelnames == ("mode", "status")

    def test_retry_counters(self):
        assert retry_attempts_total._name == "prospector_retry_attempts"
        assert retry_exhausted_total._name == "prospector_retry_exhausted"

    def test_circuit_breaker_gauge(self):
        assert circuit_breaker_state._name == "prospector_circuit_breaker_state"
        assert "name" in circuit_breaker_state._labelnames


class TestMetricsEndpoint:
    """Verify /metrics is exposed via the FastAPI app."""

    def test_metrics_endpoint_returns_200(self):
        from prospector.api.app import create_app

        app = create_app()
        # Skip provider and telemetry startup
        app.router.lifespan_context = _noop_lifespan
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "text/plain" in response.headers.get("content-type", "")
        assert "prospector_discovery_duration_seconds" in response.text
        assert "prospector_retry_attempts_total" in response.text
        assert "prospector_circuit_breaker_state" in response.text


class TestDiscoveryInstrumentation:
    def test_outcome_counter(self, make_provider, record, settings):
        from prospector.engine import DiscoveryEngine
        from prospector.models.request import DiscoveryRequest

        before_ok = _get_counter_value("prospector_discovery_requests", {"outcome": "success"})
        before_down = _get_counter_value(
            "prospector_discovery_requests", {"outcome": "LINKUP_UNAVAILABLE"}
        )
        request = DiscoveryRequest(prompt="Arts patrons in Dallas Texas", max_results=5)

        asyncio.run(DiscoveryEngine(make_provider([record("Ann Lee")]), settings).discover(request))
        asyncio.run(
            DiscoveryEngine(make_provider(reasons=["down"]), settings).discover(request)
        )

        ok = _get_counter_value("prospector_discovery_requests", {"outcome": "success"})
        down = _get_counter_value("prospector_discovery_requests", {"outcome": "LINKUP_UNAVAILABLE"})
        assert ok - before_ok == 1
        assert down - before_down == 1


class TestRetryInstrumentation:
    """Verify retry.py increments Prometheus counters."""

    def test_retry_increments_counter_on_retries(self):
        from prospector.retry import async_with_retry

        call_count = 0

        async def flaky():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ValueError("transient")
            return "ok"

        before = _get_counter_value("prospector_retry_attempts", {"fn_name": "flaky"})
        result = asyncio.run(async_with_retry(flaky, max_retries=3, base_delay=0.0, jitter=False))
        after = _get_counter_value("prospector_retry_attempts", {"fn_name": "flaky"})

        assert result == "ok"
        assert after - before == 2  # 2 retries before success

    def test_retry_exhausted_increments_counter(self):
        from prospector.retry import RetryExhaustedError, async_with_retry

        before = _get_counter_value("prospector_retry_exhausted", {"fn_name": "search"})
        with pytest.raises(RetryExhaustedError):
            asyncio.run(
                async_with_retry(_always_fail, max_retries=1, base_delay=0.0, label="search")
            )
        after = _get_counter_value("prospector_retry_exhausted", {"fn_name": "search"})
        assert after - before == 1


class TestCircuitBreakerInstrumentation:
    """Verify circuit breaker sets Prometheus gauge."""

    def test_circuit_breaker_gauge_on_trip_and_reset(self):
        from prospector.retry import CircuitBreaker

        cb = CircuitBreaker(name="test_cb_gauge", failure_threshold=2, reset_timeout=60.0)

        assert _get_gauge_value("prospector_circuit_breaker_state", {"name": "test_cb_gauge"}) == 0

        for _ in range(2):
            cb.record_failure()
        assert _get_gauge_value("prospector_circuit_breaker_state", {"name": "test_cb_gauge"}) == 1

        cb.record_success()
        assert _get_gauge_value("prospector_circuit_breaker_state", {"name": "test_cb_gauge"}) == 0


# --- Helpers ---


@asynccontextmanager
async def _noop_lifespan(app: FastAPI):
    yield


async def _always_fail():
    raise ValueError("always fails")


def _get_counter_value(metric_name: str, labels: dict[str, str]) -> float:
    """Read the current value of a Prometheus counter from the default registry.

    For counters, metric.name == base name (without _total),
    but sample.name == base_name + "_total".
    """
    for metric in REGISTRY.collect():
        if metric.name == metric_name:
            for sample in metric.samples:
                if sample.name == f"{metric_name}_total" and sample.labels == labels:
                    return sample.value
    return 0.0


def _get_gauge_value(metric_name: str, labels: dict[str, str]) -> float:
    """Read the current value of a Prometheus gauge from the default registry."""
    for metric in REGISTRY.collect():
        if metric.name == metric_name:
            for sample in metric.samples:
                if sample.name == metric_name and sample.labels == labels:
                    return sample.value
    return 0.0
