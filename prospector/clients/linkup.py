"""Client for the Linkup search API.

Linkup answers a natural-language query with a synthesized "sourced answer"
plus the citations it was built from. Standard depth: ~$0.005 per query.
Deep: ~$0.02 per query.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import structlog
from typing_extensions import TypedDict

from prospector.models.search import (
    BatchSearchResult,
    ProviderStatus,
    SearchDepth,
    SearchQuery,
    SearchResult,
    Source,
)
from prospector.planner import BLOCKED_DOMAINS
from prospector.retry import (
    CircuitBreaker,
    CircuitOpenError,
    RetryExhaustedError,
    async_with_retry,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from prospector.config import Settings

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://api.linkup.so/v1"
LINKUP_PRICING_USD: dict[str, float] = {"standard": 0.005, "deep": 0.02}
MAX_RETRY_DELAY = 10.0


class LinkupSearchPayload(TypedDict):
    q: str
    depth: str
    outputType: str
    includeSources: bool
    includeInlineCitations: bool
    includeImages: bool
    maxResults: int
    excludeDomains: list[str]


class LinkupError(Exception):
    """A classified Linkup failure.

    ``code`` is one of NOT_CONFIGURED, CIRCUIT_OPEN, RATE_LIMITED, TIMEOUT,
    AUTHENTICATION_ERROR, INVALID_REQUEST, SERVER_ERROR, NETWORK_ERROR,
    INSUFFICIENT_CREDITS or UNKNOWN_ERROR.
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.retryable = retryable

    def __repr__(self) -> str:
        return f"LinkupError(code={self.code!r}, status_code={self.status_code!r})"


def classify_status(status_code: int, body: str = "") -> LinkupError:
    """Map an HTTP error status onto a LinkupError."""
    detail = body[:200]
    if status_code == 401:
        return LinkupError("Authentication failed", "AUTHENTICATION_ERROR", 401)
    if status_code == 402:
        return LinkupError("Insufficient credits", "INSUFFICIENT_CREDITS", 402)
    if status_code == 429:
        return LinkupError("Rate limit exceeded", "RATE_LIMITED", 429, retryable=True)
    if status_code >= 500:
        return LinkupError(
            f"Linkup server error: {status_code} {detail}".strip(),
            "SERVER_ERROR",
            status_code,
            retryable=True,
        )
    return LinkupError(
        f"Invalid request: {status_code} {detail}".strip(), "INVALID_REQUEST", status_code
    )


def normalize_source_url(url: str) -> str:
    """Dedup key for a source URL: lowercased, scheme and ``www.`` stripped."""
    key = url.strip().lower()
    for prefix in ("https://", "http://"):
        if key.startswith(prefix):
            key = key[len(prefix) :]
            break
    if key.startswith("www."):
        key = key[4:]
    return key


def estimate_search_cost(depth: SearchDepth) -> float:
    """Provider list price in USD for one query at *depth*."""
    return LINKUP_PRICING_USD[depth]


def _parse_sources(data: dict[str, object]) -> list[Source]:
    raw = data.get("sources", [])
    if not isinstance(raw, list):
        return []
    sources: list[Source] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        snippet = item.get("snippet") or item.get("content")
        sources.append(
            Source(
                name=str(item.get("name") or item.get("title") or ""),
                url=str(item.get("url") or ""),
                snippet=str(snippet) if snippet else None,
            )
        )
    return sources


def _parse_answer(data: dict[str, object]) -> str:
    answer = data.get("answer") or data.get("content") or ""
    return answer if isinstance(answer, str) else str(answer)


def _is_retryable(exc: Exception) -> bool:
    return isinstance(exc, LinkupError) and exc.retryable


class LinkupClient:
    """Linkup API client implementing ``SearchProvider``.

    Each search is retried with exponential backoff on retryable errors and
    guarded by a circuit breaker that trips after consecutive failures.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 45.0,
        max_retries: int = 2,
        breaker: CircuitBreaker | None = None,
        retry_base_delay: float = 1.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.breaker = breaker or CircuitBreaker(name="linkup-search")

    @classmethod
    def from_settings(cls, settings: Settings) -> LinkupClient:
        return cls(
            api_key=settings.linkup_api_key,
            base_url=settings.linkup_base_url,
            timeout=settings.linkup_timeout_seconds,
            max_retries=settings.linkup_max_retries,
            breaker=CircuitBreaker(
                name="linkup-search",
                failure_threshold=settings.linkup_circuit_failure_threshold,
                reset_timeout=settings.linkup_circuit_reset_seconds,
            ),
        )

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def status(self) -> ProviderStatus:
        reasons: list[str] = []
        if not self.is_available:
            reasons.append("LINKUP_API_KEY not set")
        if self.breaker.is_open:
            reasons.append("Search circuit breaker is open")
        return ProviderStatus(available=not reasons, reasons=reasons)

    def reset_circuit_breaker(self) -> None:
        self.breaker.record_success()

    def build_payload(self, query: SearchQuery) -> LinkupSearchPayload:
        exclude = list(BLOCKED_DOMAINS)
        exclude.extend(d for d in query.exclude_domains if d not in exclude)
        return {
            "q": query.query,
            "depth": query.depth,
            "outputType": query.output_type,
            "includeSources": query.include_sources,
            "includeInlineCitations": query.include_inline_citations,
            "includeImages": False,
            "maxResults": query.max_results,
            "excludeDomains": exclude,
        }

    async def _post(self, payload: LinkupSearchPayload) -> dict[str, object]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(
                    f"{self.base_url}/search",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.TimeoutException as exc:
            raise LinkupError("Request timed out", "TIMEOUT", retryable=True) from exc
        except httpx.HTTPError as exc:
            raise LinkupError(f"Network error: {exc}", "NETWORK_ERROR", retryable=True) from exc

        if resp.status_code >= 400:
            raise classify_status(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise LinkupError(
                "Linkup returned a non-JSON body", "SERVER_ERROR", resp.status_code
            ) from exc
        if not isinstance(data, dict):
            raise LinkupError(
                "Linkup returned an unexpected payload", "SERVER_ERROR", resp.status_code
            )
        return data

    async def _post_with_retry(self, payload: LinkupSearchPayload) -> dict[str, object]:
        try:
            return await async_with_retry(
                lambda: self._post(payload),
                max_retries=self.max_retries,
                base_delay=self.retry_base_delay,
                max_delay=MAX_RETRY_DELAY,
                should_retry=_is_retryable,
                label="linkup_search",
            )
        except RetryExhaustedError as exc:
            cause = exc.__cause__
            if isinstance(cause, LinkupError):
                raise cause from cause.__cause__
            raise

    async def search(self, query: SearchQuery) -> SearchResult:
        """Run one sourced-answer search.

        Raises:
            LinkupError: classified failure, after retries where retryable.
        """
        if not self.is_available:
            raise LinkupError("LINKUP_API_KEY is not configured", "NOT_CONFIGURED")

        payload = self.build_payload(query)
        try:
            data = await self.breaker.call(lambda: self._post_with_retry(payload))
        except CircuitOpenError as exc:
            raise LinkupError(
                "Linkup search circuit breaker is open", "CIRCUIT_OPEN", retryable=True
            ) from exc

        return SearchResult(answer=_parse_answer(data), sources=_parse_sources(data))

    async def execute(self, queries: Sequence[SearchQuery]) -> BatchSearchResult:
        """Run *queries* concurrently; failures are counted, never raised."""
        outcomes = await asyncio.gather(
            *(self.search(q) for q in queries), return_exceptions=True
        )

        results: list[SearchResult] = []
        sources: list[Source] = []
        errors: list[str] = []
        seen_urls: set[str] = set()
        for query, outcome in zip(queries, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                code = outcome.code if isinstance(outcome, LinkupError) else "UNKNOWN_ERROR"
                logger.warning(
                    "linkup_query_failed",
                    angle=query.angle.value,
                    code=code,
                    error=str(outcome),
                )
                errors.append(f"{query.angle.value}: {outcome}")
                continue
            results.append(outcome)
            for source in outcome.sources:
                key = normalize_source_url(source.url)
                if key in seen_urls:
                    continue
                seen_urls.add(key)
                sources.append(source)

        logger.info(
            "linkup_batch_complete",
            success_count=len(results),
            error_count=len(errors),
            source_count=len(sources),
        )
        return BatchSearchResult(
            results=results,
            aggregated_sources=sources,
            success_count=len(results),
            error_count=len(errors),
            errors=errors,
        )
