"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import pytest

from prospector.config import Settings
from prospector.models.search import (
    BatchSearchResult,
    ProviderStatus,
    SearchQuery,
    SearchResult,
    Source,
)


class FakeSearchProvider:
    """In-memory ``SearchProvider`` that answers from canned text.

    Each entry of *answers* is either the answer text of a successful query
    or None for a failed one.
    """

    def __init__(
        self,
        answers: Sequence[str | None] = (),
        *,
        sources: Sequence[Source] = (),
        reasons: Sequence[str] = (),
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.answers = list(answers)
        self.sources = list(sources)
        self.reasons = list(reasons)
        self.delay = delay
        self.error = error
        self.calls: list[list[SearchQuery]] = []

    def status(self) -> ProviderStatus:
        return ProviderStatus(available=not self.reasons, reasons=self.reasons)

    async def execute(self, queries: Sequence[SearchQuery]) -> BatchSearchResult:
        self.calls.append(list(queries))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

        results = [SearchResult(answer=a, sources=self.sources) for a in self.answers if a is not None]
        errors = [f"query {i} failed" for i, a in enumerate(self.answers) if a is None]
        return BatchSearchResult(
            results=results,
            aggregated_sources=self.sources,
            success_count=len(results),
            error_count=len(errors),
            errors=errors,
        )


class RecordingTelemetry:
    def __init__(self) -> None:
        self.events: list[tuple[float, str, int, str | None]] = []

    def track_call(
        self,
        start_time: float,
        mode: str,
        source_count: int,
        error_info: str | None = None,
    ) -> None:
        self.events.append((start_time, mode, source_count, error_info))


def structured_record(
    name: str,
    *,
    title: str = "Managing Partner",
    company: str = "Granite Peak Capital",
    location: str = "Dallas, TX",
    reason: str = "Trustee of a regional education foundation",
) -> str:
    return (
        f"NAME: {name}\n"
        f"TITLE: {title}\n"
        f"COMPANY: {company}\n"
        f"LOCATION: {location}\n"
        f"MATCH REASON: {reason}\n"
    )


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        linkup_api_key="test-key",
        linkup_max_retries=0,
        discovery_timeout_seconds=5.0,
        log_level="DEBUG",
        log_format="console",
        _env_file=None,
    )


@pytest.fixture()
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture()
def make_provider() -> type[FakeSearchProvider]:
    return FakeSearchProvider


@pytest.fixture()
def record():
    """Factory for one structured ``NAME:`` record as a search answer emits it."""
    return structured_record
