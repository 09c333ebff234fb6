"""Prometheus metric definitions for prospect discovery."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# --- Discovery requests ---

discovery_requests_total = Counter(
    "prospector_discovery_requests_total",
    "Total discovery calls by outcome",
    labelnames=["outcome"],
)

discovery_duration_seconds = Histogram(
    "prospector_discovery_duration_seconds",
    "Wall-clock time of a full discovery call",
    buckets=(0.5, 1, 2, 5, 10, 20, 30, 45, 60, 90),
)

prospects_found_total = Counter(
    "prospector_prospects_found_total",
    "Prospects returned to callers",
    labelnames=["confidence"],
)

# --- Search provider ---

search_calls_total = Counter(
    "prospector_search_calls_total",
    "Search provider calls reported through telemetry",
    labelnames=["mode", "status"],
)

search_sources_total = Counter(
    "prospector_search_sources_total",
    "Sources returned by successful search calls",
    labelnames=["mode"],
)

telemetry_dropped_total = Counter(
    "prospector_telemetry_dropped_total",
    "Telemetry events dropped because the queue was full or closed",
)

# --- Retry ---

retry_attempts_total = Counter(
    "prospector_retry_attempts_total",
    "Total retry attempts against external services",
    labelnames=["fn_name"],
)

retry_exhausted_total = Counter(
    "prospector_retry_exhausted_total",
    "Total times retries were exhausted",
    labelnames=["fn_name"],
)

# --- Circuit breaker ---

circuit_breaker_state = Gauge(
    "prospector_circuit_breaker_state",
    "Circuit breaker state (0=closed, 1=open)",
    labelnames=["name"],
)

search_call_duration_seconds = Histogram(
    "prospector_search_call_duration_seconds",
    "Search provider call latency as reported through telemetry",
    labelnames=["mode"],
    buckets=(0.5, 1, 2, 5, 10, 20, 30, 45, 60),
)
