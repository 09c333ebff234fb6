"""Re-exports all Pydantic models."""

from prospector.models.prospect import Confidence, DiscoveredProspect
from prospector.models.request import DiscoveryRequest, FocusArea, Location
from prospector.models.result import DiscoveryErrorCode, DiscoveryResult
from prospector.models.search import (
    BatchSearchResult,
    ProviderStatus,
    QueryAngle,
    SearchDepth,
    SearchQuery,
    SearchResult,
    Source,
)

__all__ = [
    "BatchSearchResult",
    "Confidence",
    "DiscoveredProspect",
    "DiscoveryErrorCode",
    "DiscoveryRequest",
    "DiscoveryResult",
    "FocusArea",
    "Location",
    "ProviderStatus",
    "QueryAngle",
    "SearchDepth",
    "SearchQuery",
    "SearchResult",
    "Source",
]
