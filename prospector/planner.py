"""Query planning: one request becomes three differently-angled searches.

The per-angle candidate caps (50% / 30% / 40% of the request) add up to
120% on purpose. Cross-angle duplicates and rejected names are dropped
later, so the plan over-asks up front.
"""

from __future__ import annotations

import math

from prospector.models.request import DiscoveryRequest, FocusArea
from prospector.models.search import QueryAngle, SearchDepth, SearchQuery

# Low-signal or people-search-broker domains.
BLOCKED_DOMAINS: tuple[str, ...] = (
    "pinterest.com",
    "instagram.com",
    "tiktok.com",
    "facebook.com",
    "twitter.com",
    "x.com",
    "reddit.com",
    "quora.com",
    "yelp.com",
    "yellowpages.com",
    "whitepages.com",
)

DIRECT_PERSON_SHARE = 0.5
ORGANIZATION_SHARE = 0.3
PHILANTHROPIC_SHARE = 0.4

# Provider-side result caps as (standard, deep).
_PROVIDER_CAPS: dict[QueryAngle, tuple[int, int]] = {
    QueryAngle.DIRECT_PERSON: (20, 30),
    QueryAngle.ORGANIZATION: (15, 25),
    QueryAngle.PHILANTHROPIC: (15, 25),
}

_FOCUS_HINTS: dict[FocusArea, str] = {
    FocusArea.REAL_ESTATE: "significant real estate holdings or development activity",
    FocusArea.BUSINESS: "business ownership and executive leadership",
    FocusArea.PHILANTHROPY: "foundation involvement, nonprofit boards and documented gifts",
    FocusArea.SECURITIES: "public company insider holdings (SEC Form 4, proxy statements)",
    FocusArea.BIOGRAPHY: "published biographies, profiles and press coverage",
}


def angle_cap(max_results: int, share: float) -> int:
    return max(1, math.ceil(max_results * share))


def _provider_cap(angle: QueryAngle, deep: bool) -> int:
    standard, deep_cap = _PROVIDER_CAPS[angle]
    return deep_cap if deep else standard


def _optional_line(label: str, value: str) -> str:
    return f"{label}: {value}\n" if value else ""


def _focus_line(request: DiscoveryRequest) -> str:
    if not request.focus_areas:
        return ""
    hints = "; ".join(_FOCUS_HINTS[area] for area in request.focus_areas)
    return f"PRIORITIZE SIGNALS OF: {hints}\n"


def _direct_person_prompt(request: DiscoveryRequest, location: str, cap: int) -> str:
    return (
        f"{request.prompt}\n\n"
        "SEARCH OBJECTIVE: Find specific INDIVIDUALS (real people with full names) "
        "who match these criteria.\n"
        f"{_optional_line('LOCATION FOCUS', location)}"
        f"{_focus_line(request)}"
        "\nCRITICAL REQUIREMENTS:\n"
        "- Return REAL PEOPLE with verifiable identities\n"
        "- Include full legal names (first and last name minimum)\n"
        "- Each person must be findable via LinkedIn, news articles, SEC filings, "
        "or public records\n"
        "- Do NOT include fictional examples or placeholder names\n"
        "- Do NOT include company names without associated individuals\n\n"
        "For EACH person found, structure the information as:\n"
        "NAME: [Full Legal Name]\n"
        "TITLE: [Current or Most Recent Title]\n"
        "COMPANY: [Current or Most Recent Organization]\n"
        "LOCATION: [City, State]\n"
        "MATCH REASON: [Why they match the search criteria]\n\n"
        f"Find up to {cap} individuals."
    )


def _organization_prompt(request: DiscoveryRequest, location: str, cap: int) -> str:
    return (
        "Find executives, board members, and leaders at organizations related to: "
        f"{request.prompt}\n"
        f"{_optional_line('Located in or connected to', location)}"
        f"{_focus_line(request)}"
        "\nSEARCH FOCUS:\n"
        "- C-suite executives (CEO, CFO, President, Chairman)\n"
        "- Board of Directors members\n"
        "- Managing Partners or Senior Partners\n"
        "- Division Presidents or VPs at major organizations\n"
        "- Foundation trustees and directors\n\n"
        "For EACH person found, provide:\n"
        "NAME: [Full Legal Name]\n"
        "TITLE: [Role/Position]\n"
        "ORGANIZATION: [Company or Organization Name]\n"
        "LOCATION: [City, State if available]\n\n"
        "Search corporate websites, LinkedIn, SEC filings, and news sources.\n"
        "Return specific individuals, not just organization names.\n"
        f"Find up to {cap} individuals."
    )


def _philanthropic_prompt(request: DiscoveryRequest, location: str, cap: int) -> str:
    return (
        "Find philanthropists, major donors, and high-net-worth individuals matching: "
        f"{request.prompt}\n"
        f"{_optional_line('In or connected to', location)}"
        f"{_focus_line(request)}"
        "\nSEARCH FOR WEALTH AND PHILANTHROPY SIGNALS:\n"
        "- Private foundation trustees (Form 990-PF filings)\n"
        "- Major gift donors (named buildings, endowments, scholarships)\n"
        "- Nonprofit board members at major institutions\n"
        "- SEC Form 4 filers (public company insiders)\n"
        "- Individuals featured in wealth or philanthropy publications\n\n"
        "For EACH person found, provide:\n"
        "NAME: [Full Legal Name]\n"
        "ROLE: [Foundation trustee, Board member, Major donor, etc.]\n"
        "AFFILIATION: [Foundation name, Nonprofit, or Company]\n"
        "LOCATION: [City, State if available]\n"
        "EVIDENCE: [Source of wealth/philanthropy signal]\n\n"
        "Search ProPublica Nonprofit Explorer, SEC EDGAR, university donor lists, "
        "hospital boards.\n"
        f"Find up to {cap} individuals."
    )


def build_discovery_queries(request: DiscoveryRequest) -> list[SearchQuery]:
    """Plan exactly three queries for *request*, one per ``QueryAngle``."""
    depth: SearchDepth = "deep" if request.deep_research else "standard"
    location = request.location.as_text() if request.location else ""

    plan = (
        (QueryAngle.DIRECT_PERSON, DIRECT_PERSON_SHARE, _direct_person_prompt),
        (QueryAngle.ORGANIZATION, ORGANIZATION_SHARE, _organization_prompt),
        (QueryAngle.PHILANTHROPIC, PHILANTHROPIC_SHARE, _philanthropic_prompt),
    )

    queries: list[SearchQuery] = []
    for angle, share, render in plan:
        cap = angle_cap(request.max_results, share)
        queries.append(
            SearchQuery(
                angle=angle,
                query=render(request, location, cap),
                depth=depth,
                max_results=_provider_cap(angle, request.deep_research),
                result_cap=cap,
                exclude_domains=list(BLOCKED_DOMAINS),
            )
        )
    return queries
