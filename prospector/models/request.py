"""Inbound discovery request models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FocusArea(StrEnum):
    """Signal families a caller can ask the search to prioritize."""

    REAL_ESTATE = "real_estate"
    BUSINESS = "business"
    PHILANTHROPY = "philanthropy"
    SECURITIES = "securities"
    BIOGRAPHY = "biography"


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str | None = None
    state: str | None = None
    region: str | None = None

    def as_text(self) -> str:
        """Join the populated fields as "City, State, Region"."""
        return ", ".join(part for part in (self.city, self.state, self.region) if part)


class DiscoveryRequest(BaseModel):
    """A sanitized, bounds-checked discovery request.

    Only ``prospector.validation.validate_discovery_request`` should build
    these from untrusted input; the model itself does not re-sanitize.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    prompt: str
    max_results: int = Field(ge=1)
    template_id: str | None = None
    location: Location | None = None
    focus_areas: list[FocusArea] | None = None
    deep_research: bool = False
