"""Port interfaces (Protocols) the discovery engine depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from prospector.models.search import BatchSearchResult, ProviderStatus, SearchQuery


@runtime_checkable
class SearchProvider(Protocol):
    """Interface for web search backends that answer with sourced free text."""

    def status(self) -> ProviderStatus: ...

    async def execute(self, queries: Sequence[SearchQuery]) -> BatchSearchResult: ...


@runtime_checkable
class TelemetrySink(Protocol):
    """Interface for fire-and-forget search call tracking.

    Implementations must never raise and never block the caller.
    """

    def track_call(
        self,
        start_time: float,
        mode: str,
        source_count: int,
        error_info: str | None = None,
    ) -> None: ...
