"""Discovered prospect model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prospector.models.search import Source


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DiscoveredProspect(BaseModel):
    """A real individual surfaced by discovery.

    ``id`` is a render key (slug + timestamp), not an identity that is
    stable across requests.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    title: str | None = None
    company: str | None = None
    city: str | None = None
    state: str | None = Field(default=None, min_length=2, max_length=2)
    confidence: Confidence = Confidence.LOW
    match_reasons: list[str] = Field(min_length=1, max_length=3)
    sources: list[Source] = Field(default_factory=list, max_length=3)
