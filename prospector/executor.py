"""Dispatch planned queries to the search provider and report telemetry."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from prospector.models.search import BatchSearchResult, SearchQuery
from prospector.protocols import SearchProvider, TelemetrySink
from prospector.telemetry import NullTelemetry

logger = structlog.get_logger()


@dataclass(frozen=True)
class ExecutionOutcome:
    """What the executor learned from one batch.

    When ``provider_unavailable`` is set no query was dispatched and
    ``batch`` is empty.
    """

    batch: BatchSearchResult = field(default_factory=BatchSearchResult)
    provider_unavailable: bool = False
    reasons: list[str] = field(default_factory=list)
    query_count: int = 0

    @property
    def total_failure(self) -> bool:
        return not self.provider_unavailable and self.batch.success_count == 0


class SearchExecutor:
    def __init__(self, provider: SearchProvider, telemetry: TelemetrySink | None = None) -> None:
        self.provider = provider
        self.telemetry = telemetry or NullTelemetry()

    async def run(self, queries: Sequence[SearchQuery]) -> ExecutionOutcome:
        status = self.provider.status()
        if not status.available:
            logger.warning("search_provider_unavailable", reasons=status.reasons)
            return ExecutionOutcome(provider_unavailable=True, reasons=list(status.reasons))

        start_time = time.time()
        logger.info("search_batch_started", query_count=len(queries))
        batch = await self.provider.execute(queries)
        logger.info(
            "search_batch_finished",
            success_count=batch.success_count,
            error_count=batch.error_count,
            duration_ms=int((time.time() - start_time) * 1000),
        )

        mode = queries[0].depth if queries else "standard"
        for result in batch.results[: batch.success_count]:
            self._emit(start_time, mode, len(result.sources), None)

        return ExecutionOutcome(batch=batch, query_count=len(queries))

    def track_failure(self, start_time: float, mode: str, error_code: str) -> None:
        self._emit(start_time, mode, 0, error_code)

    def _emit(self, start_time: float, mode: str, source_count: int, error_code: str | None) -> None:
        """Hand one event to the sink; a failing sink never reaches the caller."""
        try:
            self.telemetry.track_call(start_time, mode, source_count, error_code)
        except Exception as exc:
            logger.debug("telemetry_failed", mode=mode, error=str(exc))
