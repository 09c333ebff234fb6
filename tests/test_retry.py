"""Tests for retry and circuit breaker utilities."""

from __future__ import annotations

import asyncio

import pytest

from prospector.retry import (
    CircuitBreaker,
    CircuitOpenError,
    RetryExhaustedError,
    async_with_retry,
)


def _flaky(failures: int, exc_type: type[Exception] = ValueError):
    attempts = {"count": 0}

    async def call():
        attempts["count"] += 1
        if attempts["count"] <= failures:
            raise exc_type("not yet")
        return "ok"

    return call, attempts


async def _fail():
    raise ValueError("fail")


class TestAsyncWithRetry:
    def test_succeeds_first_try(self):
        call, attempts = _flaky(0)
        assert asyncio.run(async_with_retry(call, max_retries=3, base_delay=0.0)) == "ok"
        assert attempts["count"] == 1

    def test_succeeds_after_failures(self):
        call, attempts = _flaky(2)
        result = asyncio.run(async_with_retry(call, max_retries=3, base_delay=0.0))
        assert result == "ok"
        assert attempts["count"] == 3

    def test_exhausted_raises(self):
        with pytest.raises(RetryExhaustedError, match="Failed after 4 attempts") as excinfo:
            asyncio.run(async_with_retry(_fail, max_retries=3, base_delay=0.0))
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_should_retry_rejects_immediately(self):
        call, attempts = _flaky(5, TypeError)

        with pytest.raises(TypeError):
            asyncio.run(
                async_with_retry(
                    call,
                    max_retries=3,
                    base_delay=0.0,
                    should_retry=lambda exc: isinstance(exc, ValueError),
                )
            )
        assert attempts["count"] == 1

    def test_no_jitter(self):
        call, _ = _flaky(1)
        result = asyncio.run(async_with_retry(call, max_retries=1, base_delay=0.0, jitter=False))
        assert result == "ok"


class TestCircuitBreaker:
    def test_starts_closed(self):
        cb = CircuitBreaker(name="test")
        assert cb.is_open is False

    def test_stays_closed_on_success(self):
        cb = CircuitBreaker(name="test")
        call, _ = _flaky(0)
        assert asyncio.run(cb.call(call)) == "ok"
        assert cb.is_open is False

    def test_trips_after_threshold(self):
        cb = CircuitBreaker(name="test", failure_threshold=3)

        for _ in range(3):
            with pytest.raises(ValueError):
                asyncio.run(cb.call(_fail))

        assert cb.is_open is True

    def test_open_circuit_raises(self):
        cb = CircuitBreaker(name="test", failure_threshold=1)
        with pytest.raises(ValueError):
            asyncio.run(cb.call(_fail))

        call, attempts = _flaky(0)
        with pytest.raises(CircuitOpenError):
            asyncio.run(cb.call(call))
        assert attempts["count"] == 0

    def test_success_resets_failure_count(self):
        cb = CircuitBreaker(name="test", failure_threshold=3)

        for _ in range(2):
            with pytest.raises(ValueError):
                asyncio.run(cb.call(_fail))

        call, _ = _flaky(0)
        asyncio.run(cb.call(call))

        for _ in range(2):
            with pytest.raises(ValueError):
                asyncio.run(cb.call(_fail))

        assert cb.is_open is False  # Still only 2 after reset

    def test_auto_reset_after_timeout(self):
        cb = CircuitBreaker(name="test", failure_threshold=1, reset_timeout=0.0)
        cb.record_failure()

        assert cb._is_open is True
        # With reset_timeout=0, the next is_open check closes it
        assert cb.is_open is False
