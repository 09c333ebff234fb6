"""Candidate-name extraction over combined search answers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from prospector.extraction.names import is_valid_person_name, normalize_name
from prospector.extraction.tiers import TIER_PIPELINE, ExtractionTier, TierStrategy
from prospector.models.search import SearchResult

CONTEXT_BEFORE = 50
CONTEXT_AFTER = 500
ANSWER_SEPARATOR = "\n\n---\n\n"

# Start of the next structured record; a context window never crosses it.
_NEXT_RECORD = re.compile(r"(?i:\bNAME)\**:")


@dataclass(frozen=True)
class Candidate:
    """A validated, unique name plus the text it was found in.

    ``context[name_offset:]`` is the candidate's own record, from the match
    onward; the lead-in before it is kept for prose heuristics.
    """

    name: str
    tier: ExtractionTier
    position: int
    context: str
    name_offset: int

    @property
    def record(self) -> str:
        return self.context[self.name_offset :]


def combine_answers(results: Iterable[SearchResult]) -> str:
    return ANSWER_SEPARATOR.join(r.answer for r in results if r.answer)


def context_window(text: str, start: int) -> tuple[str, int]:
    """Return ``(window, offset_of_start_in_window)`` for a match at *start*."""
    window_start = max(0, start - CONTEXT_BEFORE)
    window_end = min(len(text), start + CONTEXT_AFTER)
    window = text[window_start:window_end]
    offset = start - window_start

    # Skip the match's own tag so only a following record truncates the window.
    next_record = _NEXT_RECORD.search(window, offset + 1)
    if next_record is not None:
        window = window[: next_record.start()]
    return window, offset


def iter_candidates(
    text: str,
    seen: set[str],
    tiers: Iterable[TierStrategy] = TIER_PIPELINE,
) -> Iterator[Candidate]:
    """Lazily yield unique candidates, tier by tier.

    Later tiers are only scanned when the consumer keeps pulling, so a
    caller that stops at its quota never pays for low-precision passes.
    *seen* holds dedup keys and is mutated in place; pass a fresh set per
    request.
    """
    if not text:
        return
    for strategy in tiers:
        for match in strategy.matches(text):
            if not is_valid_person_name(match.name):
                continue
            key = normalize_name(match.name)
            if key in seen:
                continue
            seen.add(key)
            window, offset = context_window(text, match.start)
            yield Candidate(
                name=match.name,
                tier=strategy.tier,
                position=match.start,
                context=window,
                name_offset=offset,
            )


def extract_candidates(
    text: str,
    max_results: int,
    seen: set[str] | None = None,
) -> list[Candidate]:
    """Collect up to *max_results* unique, valid candidates from *text*."""
    seen = set() if seen is None else seen
    candidates: list[Candidate] = []
    if max_results <= 0:
        return candidates
    for candidate in iter_candidates(text, seen):
        candidates.append(candidate)
        if len(candidates) >= max_results:
            break
    return candidates
