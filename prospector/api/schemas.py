"""API response schemas (separate from domain models)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prospector.templates import DiscoveryTemplate


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    status: str
    version: str
    search_available: bool
    reasons: list[str] = Field(default_factory=list)


class TemplateListResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    templates: list[DiscoveryTemplate]
    categories: dict[str, str] = Field(description="Category id to display label")
