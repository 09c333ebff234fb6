"""Confidence scoring from source corroboration and field completeness."""

from __future__ import annotations

from collections.abc import Iterable

from prospector.models.prospect import Confidence
from prospector.models.search import Source

MAX_SOURCES_PER_PROSPECT = 3


def find_relevant_sources(
    name: str,
    sources: Iterable[Source],
    limit: int = MAX_SOURCES_PER_PROSPECT,
) -> list[Source]:
    """Sources whose name or snippet mentions the candidate's surname."""
    parts = name.split()
    if not parts:
        return []
    surname = parts[-1].lower()

    relevant: list[Source] = []
    for source in sources:
        haystacks = (source.name or "", source.snippet or "")
        if any(surname in text.lower() for text in haystacks):
            relevant.append(source)
            if len(relevant) >= limit:
                break
    return relevant


def score_confidence(source_count: int, *, has_title: bool, has_company: bool) -> Confidence:
    """Derive a confidence tier; field completeness alone never reaches HIGH."""
    if source_count >= 2:
        return Confidence.HIGH
    if source_count == 1:
        return Confidence.MEDIUM
    if has_title and has_company:
        return Confidence.MEDIUM
    return Confidence.LOW
