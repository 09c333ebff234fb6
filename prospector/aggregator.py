"""Assemble ``DiscoveryResult`` values for every outcome of a discovery call."""

from __future__ import annotations

from collections.abc import Sequence

from prospector.models.prospect import DiscoveredProspect
from prospector.models.result import DiscoveryErrorCode, DiscoveryResult

UNAVAILABLE_MESSAGE = "Web search is unavailable"
TOTAL_FAILURE_MESSAGE = "All search queries failed. Please try again."
NO_RESULTS_WARNING = "No prospects found matching your criteria. Try broadening your search."


def unavailable_result(prompt: str, reasons: Sequence[str], duration_ms: int) -> DiscoveryResult:
    return DiscoveryResult(
        success=False,
        query_executed=prompt,
        duration_ms=duration_ms,
        error=". ".join(reasons) or UNAVAILABLE_MESSAGE,
        error_code=DiscoveryErrorCode.LINKUP_UNAVAILABLE,
    )


def total_failure_result(prompt: str, query_count: int, duration_ms: int) -> DiscoveryResult:
    """Every query failed: nothing succeeded, so nothing is billed."""
    return DiscoveryResult(
        success=False,
        query_executed=prompt,
        duration_ms=duration_ms,
        query_count=query_count,
        error=TOTAL_FAILURE_MESSAGE,
        error_code=DiscoveryErrorCode.SERVER_ERROR,
    )


def error_result(
    prompt: str,
    code: DiscoveryErrorCode,
    message: str,
    duration_ms: int,
) -> DiscoveryResult:
    return DiscoveryResult(
        success=False,
        query_executed=prompt,
        duration_ms=duration_ms,
        error=message,
        error_code=code,
    )


def assemble_result(
    prompt: str,
    prospects: Sequence[DiscoveredProspect],
    *,
    max_results: int,
    query_count: int,
    success_count: int,
    error_count: int,
    duration_ms: int,
    cost_per_search_cents: int,
) -> DiscoveryResult:
    """Build the success result, truncating to *max_results*.

    Cost is ``success_count * cost_per_search_cents`` in every branch.
    """
    kept = list(prospects[:max_results])
    cost = success_count * cost_per_search_cents

    warnings: list[str] = []
    if not kept:
        warnings.append(NO_RESULTS_WARNING)
    else:
        if error_count > 0:
            warnings.append(f"{error_count} of {query_count} search queries had errors")
        if len(kept) < max_results:
            warnings.append(
                f"Found {len(kept)} prospects (requested {max_results}). "
                "Try different criteria for more results."
            )

    return DiscoveryResult(
        success=True,
        prospects=kept,
        total_found=len(kept),
        query_executed=prompt,
        duration_ms=duration_ms,
        estimated_cost_cents=cost,
        query_count=query_count,
        warnings=warnings or None,
    )
