"""Per-candidate field mining: title, company, location, match reasons.

Explicit tags (``TITLE:``, ``COMPANY:`` ...) are read from the candidate's
own record only. Prose heuristics fall back to the whole context window.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from prospector.extraction.entities import Candidate
from prospector.extraction.states import normalize_state, state_alternation

MAX_TITLE_LENGTH = 100
MAX_REASONS = 3
MAX_HEURISTIC_REASON_LENGTH = 150
DEFAULT_MATCH_REASON = "Matches search criteria"

_TAG_VALUE = r"\**:[ \t*]*([^\n]+)"

_TITLE_TAG = re.compile(rf"\b(?:TITLE|ROLE){_TAG_VALUE}", re.IGNORECASE)
_TITLE_ROLE = re.compile(
    r"(?:\bas[ \t]+(?:the[ \t]+)?|\bis[ \t]+(?:the[ \t]+)?|,[ \t]*)"
    r"((?:CEO|CFO|COO|CTO|Vice[ \t]+President|President|Chairman|Chairwoman|VP|"
    r"Managing[ \t]+Director|Executive[ \t]+Director|Director|Managing[ \t]+Partner|Partner|"
    r"Co-Founder|Founder|Trustee)\b[^\n,.;]*)",
    re.IGNORECASE,
)

_COMPANY_TAG = re.compile(rf"\b(?:COMPANY|ORGANIZATION|AFFILIATION){_TAG_VALUE}", re.IGNORECASE)
_ORG_WORD = r"[A-Z&][A-Za-z0-9&'.\-]*"
_ORG_SUFFIX = (
    r"Inc|LLC|LLP|Corp(?:oration)?|Company|Co|Foundation|Group|Partners|Capital|"
    r"Ventures|Holdings|Trust|Fund|Associates|Enterprises"
)
_COMPANY_SUFFIXED = re.compile(
    rf"\b(?i:at|of|with)[ \t]+(?:the[ \t]+)?"
    rf"((?:{_ORG_WORD},?[ \t]+){{0,5}}?(?:{_ORG_SUFFIX})\b\.?)"
)
_COMPANY_CAPITALIZED = re.compile(
    rf"\b(?i:at|of|with)[ \t]+(?:the[ \t]+)?"
    rf"({_ORG_WORD}(?:[ \t]+(?:&[ \t]+)?{_ORG_WORD}){{0,5}})"
)

_LOCATION_TAG = re.compile(
    r"\bLOCATION\**:[ \t*]*([^,\n]+)(?:,[ \t]*([A-Za-z. \t]+))?",
    re.IGNORECASE,
)
_CITY_STATE = re.compile(
    rf"\b([A-Z][a-z]+(?:[ \t][A-Z][a-z]+)?)[ \t]*,[ \t]*({state_alternation()})\b"
)
_STATE_ONLY = re.compile(rf"\b({state_alternation(include_ambiguous=False)})\b")
_EMPTY_VALUES = frozenset({"n/a", "na", "none", "unknown", "not available", "not specified"})

_REASON_TAG = re.compile(
    r"\b(?:MATCH[ \t]+REASON|EVIDENCE|WHY|REASON)\**:[ \t*]*([^\n]+)",
    re.IGNORECASE,
)
_REASON_HEURISTICS = (
    re.compile(
        r"(?:serves?[ \t]+(?:on|as)|member[ \t]+of|trustee[ \t]+of|board[ \t]+of)[ \t]+[^,.\n]+",
        re.IGNORECASE,
    ),
    re.compile(r"(?:co-founded|founded|founder[ \t]+of|founder)[ \t]+[^,.\n]+", re.IGNORECASE),
    re.compile(
        r"(?:donated|gift[ \t]+of|contributed|pledged)[ \t]+\$?\d[\d,.]*"
        r"(?:[ \t]*(?:million|billion|thousand))?",
        re.IGNORECASE,
    ),
)


@dataclass(frozen=True)
class ProspectDetails:
    title: str | None = None
    company: str | None = None
    city: str | None = None
    state: str | None = None
    match_reasons: list[str] = field(default_factory=list)


def _clean(value: str) -> str | None:
    cleaned = value.strip().strip("*").strip()
    if not cleaned or cleaned.lower() in _EMPTY_VALUES:
        return None
    return cleaned


def extract_title(record: str, context: str) -> str | None:
    match = _TITLE_TAG.search(record)
    if match:
        title = _clean(match.group(1))
        if title:
            return title[:MAX_TITLE_LENGTH]
    match = _TITLE_ROLE.search(context)
    if match:
        return match.group(1).strip()[:MAX_TITLE_LENGTH]
    return None


def _bounded_company(raw: str) -> str | None:
    company = re.sub(r"[.,;]+$", "", raw.strip()).strip()
    if 3 < len(company) < 100:
        return company
    return None


def extract_company(record: str, context: str) -> str | None:
    match = _COMPANY_TAG.search(record)
    if match:
        value = _clean(match.group(1))
        company = _bounded_company(value) if value else None
        if company:
            return company
    for pattern in (_COMPANY_SUFFIXED, _COMPANY_CAPITALIZED):
        match = pattern.search(context)
        if match:
            company = _bounded_company(match.group(1))
            if company:
                return company
    return None


def extract_location(record: str, context: str) -> tuple[str | None, str | None]:
    """Return ``(city, state)``; state is always a valid 2-letter code or None."""
    match = _LOCATION_TAG.search(record)
    if match:
        city = _clean(match.group(1))
        state = normalize_state(match.group(2))
        if state is None and match.group(2) is None and city is not None:
            # "LOCATION: Texas" names a state, not a city
            as_state = normalize_state(city)
            if as_state is not None:
                return None, as_state
        return city, state

    match = _CITY_STATE.search(context)
    if match:
        state = normalize_state(match.group(2))
        if state is not None:
            return match.group(1).strip(), state

    match = _STATE_ONLY.search(context)
    return None, (normalize_state(match.group(1)) if match else None)


def extract_match_reasons(record: str, context: str) -> list[str]:
    reasons: list[str] = []
    for match in _REASON_TAG.finditer(record):
        reason = match.group(1).strip()
        if 10 < len(reason) < 200 and reason not in reasons:
            reasons.append(reason)

    if not reasons:
        for pattern in _REASON_HEURISTICS:
            match = pattern.search(context)
            if match:
                reason = match.group(0).strip()[:MAX_HEURISTIC_REASON_LENGTH]
                if reason not in reasons:
                    reasons.append(reason)

    return reasons[:MAX_REASONS]


def extract_details(candidate: Candidate) -> ProspectDetails:
    record, context = candidate.record, candidate.context
    city, state = extract_location(record, context)
    return ProspectDetails(
        title=extract_title(record, context),
        company=extract_company(record, context),
        city=city,
        state=state,
        match_reasons=extract_match_reasons(record, context),
    )
