"""Discovery engine: plan, search, extract, score and assemble.

The engine is the single error boundary of a discovery call. Whatever goes
wrong below it (provider outage, total query failure, timeout, a bug) comes
back as a ``DiscoveryResult`` with an error code; ``discover`` never raises.
"""

from __future__ import annotations

import asyncio
import time

import structlog

from prospector.aggregator import (
    assemble_result,
    error_result,
    total_failure_result,
    unavailable_result,
)
from prospector.config import Settings
from prospector.executor import SearchExecutor
from prospector.extraction import combine_answers, extract_prospects
from prospector.metrics import (
    discovery_duration_seconds,
    discovery_requests_total,
    prospects_found_total,
)
from prospector.models.request import DiscoveryRequest
from prospector.models.result import DiscoveryErrorCode, DiscoveryResult
from prospector.planner import build_discovery_queries
from prospector.protocols import SearchProvider, TelemetrySink

logger = structlog.get_logger()


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class DiscoveryEngine:
    def __init__(
        self,
        provider: SearchProvider,
        settings: Settings | None = None,
        telemetry: TelemetrySink | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.executor = SearchExecutor(provider, telemetry)

    async def discover(self, request: DiscoveryRequest) -> DiscoveryResult:
        """Run one discovery call under the overall timeout."""
        started = time.monotonic()
        wall_start = time.time()
        timeout = self.settings.discovery_timeout_seconds
        log = logger.bind(max_results=request.max_results, deep=request.deep_research)

        try:
            result = await asyncio.wait_for(self._run(request, started), timeout=timeout)
        except TimeoutError:
            duration_ms = _elapsed_ms(started)
            log.warning("discovery_timeout", duration_ms=duration_ms, timeout_s=timeout)
            result = error_result(
                request.prompt,
                DiscoveryErrorCode.TIMEOUT,
                f"Discovery timed out after {timeout:g} seconds",
                duration_ms,
            )
        except Exception as exc:
            duration_ms = _elapsed_ms(started)
            log.exception("discovery_failed", duration_ms=duration_ms)
            self.executor.track_failure(
                wall_start, "deep" if request.deep_research else "standard", "UNKNOWN_ERROR"
            )
            result = error_result(
                request.prompt,
                DiscoveryErrorCode.SERVER_ERROR,
                f"Discovery search failed: {exc}",
                duration_ms,
            )

        self._record(result)
        log.info(
            "discovery_complete",
            success=result.success,
            error_code=result.error_code,
            total_found=result.total_found,
            duration_ms=result.duration_ms,
        )
        return result

    async def _run(self, request: DiscoveryRequest, started: float) -> DiscoveryResult:
        queries = build_discovery_queries(request)
        outcome = await self.executor.run(queries)

        if outcome.provider_unavailable:
            return unavailable_result(request.prompt, outcome.reasons, _elapsed_ms(started))

        batch = outcome.batch
        if outcome.total_failure:
            logger.error(
                "discovery_all_queries_failed",
                query_count=len(queries),
                errors=batch.errors,
            )
            return total_failure_result(request.prompt, len(queries), _elapsed_ms(started))

        text = combine_answers(batch.results)
        prospects = extract_prospects(text, batch.aggregated_sources, request.max_results)

        return assemble_result(
            request.prompt,
            prospects,
            max_results=request.max_results,
            query_count=len(queries),
            success_count=batch.success_count,
            error_count=batch.error_count,
            duration_ms=_elapsed_ms(started),
            cost_per_search_cents=self.settings.cost_per_search_cents,
        )

    @staticmethod
    def _record(result: DiscoveryResult) -> None:
        outcome = result.error_code.value if result.error_code else "success"
        discovery_requests_total.labels(outcome=outcome).inc()
        discovery_duration_seconds.observe(result.duration_ms / 1000)
        for prospect in result.prospects:
            prospects_found_total.labels(confidence=prospect.confidence.value).inc()
