"""Discovery result model and error codes."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prospector.models.prospect import DiscoveredProspect


class DiscoveryErrorCode(StrEnum):
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"
    INVALID_REQUEST = "INVALID_REQUEST"
    LINKUP_UNAVAILABLE = "LINKUP_UNAVAILABLE"
    NO_RESULTS = "NO_RESULTS"
    TIMEOUT = "TIMEOUT"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    SERVER_ERROR = "SERVER_ERROR"


class DiscoveryResult(BaseModel):
    """Outcome of one discovery call, successful or not."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    success: bool
    prospects: list[DiscoveredProspect] = Field(default_factory=list)
    total_found: int = 0
    query_executed: str = ""
    duration_ms: int = 0
    estimated_cost_cents: int = 0
    query_count: int = 0
    warnings: list[str] | None = None
    error: str | None = None
    error_code: DiscoveryErrorCode | None = None

    def to_wire(self) -> dict[str, object]:
        """camelCase dict with unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
