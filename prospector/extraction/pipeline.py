"""Turn combined search answers into scored, deduplicated prospects."""

from __future__ import annotations

import time
from collections.abc import Sequence

import structlog

from prospector.extraction.details import DEFAULT_MATCH_REASON, extract_details
from prospector.extraction.entities import Candidate, iter_candidates
from prospector.extraction.names import name_slug
from prospector.extraction.scoring import find_relevant_sources, score_confidence
from prospector.models.prospect import DiscoveredProspect
from prospector.models.search import Source

logger = structlog.get_logger()


def build_prospect(
    candidate: Candidate,
    sources: Sequence[Source],
    *,
    timestamp_ms: int | None = None,
) -> DiscoveredProspect:
    details = extract_details(candidate)
    relevant = find_relevant_sources(candidate.name, sources)
    confidence = score_confidence(
        len(relevant),
        has_title=details.title is not None,
        has_company=details.company is not None,
    )
    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    return DiscoveredProspect(
        id=f"prospect-{name_slug(candidate.name)}-{stamp}",
        name=candidate.name,
        title=details.title,
        company=details.company,
        city=details.city,
        state=details.state,
        confidence=confidence,
        match_reasons=details.match_reasons or [DEFAULT_MATCH_REASON],
        sources=relevant,
    )


def extract_prospects(
    text: str,
    sources: Sequence[Source],
    max_results: int,
) -> list[DiscoveredProspect]:
    """Run the tier cascade and build at most *max_results* prospects.

    A candidate whose details cannot be built is logged and skipped; the
    rest of the batch continues.
    """
    prospects: list[DiscoveredProspect] = []
    if max_results <= 0 or not text:
        return prospects

    seen: set[str] = set()
    timestamp_ms = int(time.time() * 1000)
    for candidate in iter_candidates(text, seen):
        try:
            prospect = build_prospect(candidate, sources, timestamp_ms=timestamp_ms)
        except Exception as exc:
            logger.warning(
                "candidate_skipped",
                name=candidate.name,
                tier=candidate.tier.value,
                error=str(exc),
            )
            continue
        prospects.append(prospect)
        if len(prospects) >= max_results:
            break

    logger.debug("prospects_extracted", count=len(prospects), unique_names=len(seen))
    return prospects
