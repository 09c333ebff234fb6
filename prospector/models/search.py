"""Search provider request/response models."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SearchDepth = Literal["standard", "deep"]


class QueryAngle(StrEnum):
    """Which framing of the search intent a query carries."""

    DIRECT_PERSON = "direct_person"
    ORGANIZATION = "organization"
    PHILANTHROPIC = "philanthropic"


class SearchQuery(BaseModel):
    """One planned provider call. Built fresh per request, never persisted."""

    model_config = ConfigDict(frozen=True)

    angle: QueryAngle
    query: str
    depth: SearchDepth = "standard"
    output_type: str = "sourcedAnswer"
    include_inline_citations: bool = True
    include_sources: bool = True
    max_results: int = Field(default=20, ge=1, description="Provider-side result cap")
    result_cap: int = Field(default=1, ge=1, description="Candidates this angle is asked for")
    exclude_domains: list[str] = Field(default_factory=list)


class Source(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    url: str = ""
    snippet: str | None = None


class SearchResult(BaseModel):
    """Free-text answer plus citations for a single query."""

    model_config = ConfigDict(frozen=True)

    answer: str = ""
    sources: list[Source] = Field(default_factory=list)


class BatchSearchResult(BaseModel):
    """Fan-in of a concurrent batch of queries."""

    model_config = ConfigDict(frozen=True)

    results: list[SearchResult] = Field(default_factory=list)
    aggregated_sources: list[Source] = Field(default_factory=list)
    success_count: int = 0
    error_count: int = 0
    errors: list[str] = Field(default_factory=list)


class ProviderStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    available: bool
    reasons: list[str] = Field(default_factory=list)
