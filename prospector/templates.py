"""Curated discovery prompt templates.

Each template is a ready-made prompt for a common prospecting scenario with
``[city]``, ``[state]`` and ``[cause]`` placeholders the caller fills in.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_PLACEHOLDER_LENGTH = 100

_UNSAFE_VALUE = re.compile(r"<script|javascript:|data:", re.IGNORECASE)


class TemplateError(ValueError):
    """A template could not be filled from the supplied values."""


class TemplateCategory(StrEnum):
    BUSINESS = "business"
    PHILANTHROPY = "philanthropy"
    WEALTH = "wealth"
    DEMOGRAPHICS = "demographics"


class TemplatePlaceholder(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    key: str = Field(description="Literal token in the prompt, e.g. '[city]'")
    label: str
    type: str = "text"
    required: bool = True
    default_value: str | None = None


class DiscoveryTemplate(BaseModel):
    """A named, pre-written discovery prompt."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    prompt: str
    placeholders: list[TemplatePlaceholder] = Field(default_factory=list)
    category: TemplateCategory
    estimated_cost_cents: int = 2
    icon: str = ""


US_STATES: tuple[str, ...] = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana",
    "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota",
    "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada",
    "New Hampshire", "New Jersey", "New Mexico", "New York",
    "North Carolina", "North Dakota", "Ohio", "Oklahoma", "Oregon",
    "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington",
    "West Virginia", "Wisconsin", "Wyoming",
)  # fmt: skip

CAUSE_AREAS: tuple[str, ...] = (
    "education",
    "healthcare",
    "arts and culture",
    "environment",
    "social services",
    "religious organizations",
    "youth development",
    "community development",
    "animal welfare",
    "international relief",
)

CATEGORY_LABELS: dict[TemplateCategory, str] = {
    TemplateCategory.BUSINESS: "Business & Executive",
    TemplateCategory.PHILANTHROPY: "Philanthropy & Foundations",
    TemplateCategory.WEALTH: "Wealth Indicators",
    TemplateCategory.DEMOGRAPHICS: "Demographics",
}

_CITY = TemplatePlaceholder(key="[city]", label="City")
_STATE = TemplatePlaceholder(key="[state]", label="State")
_CAUSE = TemplatePlaceholder(key="[cause]", label="Cause Area", default_value="education")


# ---------------------------------------------------------------------------
# Business
# ---------------------------------------------------------------------------

TECH_EXECUTIVES = DiscoveryTemplate(
    id="tech-executives-city",
    title="Tech Executives",
    description=(
        "Technology company executives in a specific metro area who support "
        "education or STEM causes"
    ),
    prompt=(
        "Find technology company executives (CEOs, CTOs, founders, VPs) in [city], "
        "[state] who have demonstrated interest in education, STEM, or innovation "
        "philanthropy.\n\n"
        "SEARCH CRITERIA:\n"
        "- Current or former executives at technology companies\n"
        "- Located in or near [city], [state]\n"
        "- Companies with $10M+ revenue or 50+ employees preferred\n"
        "- Evidence of charitable giving, nonprofit board service, or foundation "
        "involvement\n\n"
        "For each person found, provide:\n"
        "- Full legal name\n"
        "- Current title and company\n"
        "- City and state\n"
        "- Why they match the search criteria (philanthropic activity, board "
        "service, etc.)\n\n"
        "Return specific individuals with verifiable identities. Each person should "
        "be findable via LinkedIn, news articles, or public records."
    ),
    placeholders=[_CITY, _STATE],
    category=TemplateCategory.BUSINESS,
    icon="Cpu",
)

HEALTHCARE_EXECUTIVES = DiscoveryTemplate(
    id="healthcare-executives",
    title="Healthcare Executives",
    description=(
        "Hospital administrators and healthcare leaders with nonprofit board experience"
    ),
    prompt=(
        "Find healthcare executives in [city], [state] who have nonprofit board "
        "experience or foundation affiliations.\n\n"
        "SEARCH CRITERIA:\n"
        "- Hospital CEOs, CFOs, CMOs, and administrators\n"
        "- Health system executives\n"
        "- Pharmaceutical and medical device company leaders\n"
        "- Healthcare private equity partners\n"
        "- Located in or near [city], [state]\n"
        "- Evidence of nonprofit board service outside their organization\n\n"
        "For each person found, provide:\n"
        "- Full legal name\n"
        "- Current title and organization\n"
        "- City and state\n"
        "- Nonprofit board positions or philanthropic activity\n\n"
        "Search:\n"
        "- Hospital and health system leadership pages\n"
        "- Healthcare industry publications\n"
        "- University hospital boards of trustees\n"
        "- Medical school advisory boards"
    ),
    placeholders=[_CITY, _STATE],
    category=TemplateCategory.BUSINESS,
    icon="FirstAid",
)

RETIRED_FORTUNE_500 = DiscoveryTemplate(
    id="retired-fortune-500",
    title="Retired Fortune 500 Executives",
    description="Former Fortune 500 executives now serving on boards",
    prompt=(
        "Find retired Fortune 500 executives living in [city], [state] who now serve "
        "on corporate boards, university boards, or nonprofit boards.\n\n"
        "SEARCH CRITERIA:\n"
        "- Former CEOs, CFOs, COOs, or division presidents of Fortune 500 companies\n"
        "- Currently retired or in advisory/board roles\n"
        "- Living in or connected to [city], [state]\n"
        "- Active on multiple boards (indicates capacity and engagement)\n\n"
        "For each person found, provide:\n"
        "- Full legal name\n"
        "- Former company and highest role achieved\n"
        "- Current city and state\n"
        "- Current board positions (corporate, nonprofit, university)\n\n"
        "Search:\n"
        "- Corporate proxy statements (DEF 14A) for board members\n"
        "- University board of trustees listings\n"
        "- Major nonprofit board rosters\n"
        "- Executive retirement announcements"
    ),
    placeholders=[_CITY, _STATE],
    category=TemplateCategory.BUSINESS,
    icon="UserCircle",
)

# ---------------------------------------------------------------------------
# Philanthropy
# ---------------------------------------------------------------------------

FOUNDATION_BOARD_MEMBERS = DiscoveryTemplate(
    id="foundation-board-members",
    title="Foundation Board Members",
    description="Private foundation trustees and board members in a specific state",
    prompt=(
        "Find private foundation board members, trustees, and directors in [city], "
        "[state].\n\n"
        "SEARCH CRITERIA:\n"
        "- Trustees or directors of private family foundations\n"
        "- Focus on foundations with assets over $5 million\n"
        "- Located in or near [city], [state]\n"
        "- Include foundation name and role for each person\n"
        "- Look for IRS Form 990-PF filings, ProPublica Nonprofit Explorer, GuideStar\n\n"
        "For each person found, provide:\n"
        "- Full legal name\n"
        "- Foundation name and role (Trustee, Director, President, etc.)\n"
        "- City and state\n"
        "- Foundation focus areas if known\n\n"
        "Search sources:\n"
        "- ProPublica Nonprofit Explorer (990-PF filings)\n"
        "- GuideStar/Candid foundation profiles\n"
        "- Foundation websites and annual reports\n"
        "- News articles about foundation grants"
    ),
    placeholders=[_CITY, _STATE],
    category=TemplateCategory.PHILANTHROPY,
    icon="Bank",
)

FAMILY_FOUNDATION_TRUSTEES = DiscoveryTemplate(
    id="family-foundation-trustees",
    title="Family Foundation Trustees",
    description=(
        "Multi-generational family foundation leaders focused on a specific cause"
    ),
    prompt=(
        "Find trustees and directors of family foundations in [city], [state] that "
        "focus on [cause].\n\n"
        "SEARCH CRITERIA:\n"
        "- Family foundation trustees (not just donors)\n"
        "- Foundations that have made grants to [cause] organizations\n"
        "- Located in or near [city], [state]\n"
        "- Multi-generational family involvement preferred\n"
        "- Foundations with ongoing grantmaking activity\n\n"
        "For each person found, provide:\n"
        "- Full legal name\n"
        "- Foundation name and role\n"
        "- City and state\n"
        "- Connection to [cause] (grants made, personal involvement)\n\n"
        "Search:\n"
        "- ProPublica Nonprofit Explorer for 990-PF filings\n"
        "- Foundation grant databases\n"
        "- Charity Navigator foundation profiles\n"
        "- News about major grants to [cause] organizations\n"
        "- [cause] organization donor recognition lists"
    ),
    placeholders=[_CITY, _STATE, _CAUSE],
    category=TemplateCategory.PHILANTHROPY,
    icon="Users",
)

# ---------------------------------------------------------------------------
# Wealth
# ---------------------------------------------------------------------------

REAL_ESTATE_INVESTORS = DiscoveryTemplate(
    id="real-estate-investors",
    title="Real Estate Investors",
    description=(
        "Commercial real estate investors and developers with philanthropic involvement"
    ),
    prompt=(
        "Find commercial real estate investors, property developers, and real estate "
        "executives in [city], [state] who have demonstrated philanthropic "
        "involvement.\n\n"
        "SEARCH CRITERIA:\n"
        "- Owners or executives of commercial real estate companies\n"
        "- Property developers with significant portfolios\n"
        "- Evidence of nonprofit board service or charitable giving\n"
        "- Located in or operating in [city], [state]\n\n"
        "For each person found, provide:\n"
        "- Full legal name\n"
        "- Company/firm name and role\n"
        "- City and state\n"
        "- Philanthropic involvement (boards, donations, foundations)\n\n"
        "Look for:\n"
        "- Real estate development company executives\n"
        "- Commercial property owners\n"
        "- REIT executives with local ties\n"
        "- Developers who have named buildings after themselves (wealth indicator)"
    ),
    placeholders=[_CITY, _STATE],
    category=TemplateCategory.WEALTH,
    icon="Buildings",
)

DISCOVERY_TEMPLATES: list[DiscoveryTemplate] = [
    TECH_EXECUTIVES,
    FOUNDATION_BOARD_MEMBERS,
    REAL_ESTATE_INVESTORS,
    HEALTHCARE_EXECUTIVES,
    RETIRED_FORTUNE_500,
    FAMILY_FOUNDATION_TRUSTEES,
]


def get_template_by_id(template_id: str) -> DiscoveryTemplate | None:
    return next((t for t in DISCOVERY_TEMPLATES if t.id == template_id), None)


def get_templates_by_category(category: str) -> list[DiscoveryTemplate]:
    return [t for t in DISCOVERY_TEMPLATES if t.category == category]


def get_categories() -> list[TemplateCategory]:
    """Categories that have at least one template, in catalog order."""
    return list(dict.fromkeys(t.category for t in DISCOVERY_TEMPLATES))


def _provided(values: Mapping[str, str], key: str) -> str:
    value = values.get(key)
    return value.strip() if isinstance(value, str) else ""


def fill_template_placeholders(template: DiscoveryTemplate, values: Mapping[str, str]) -> str:
    """Substitute every placeholder occurrence in the template prompt.

    A required placeholder is satisfied by a non-blank value or by its
    default. Raises TemplateError naming every missing label otherwise.
    """
    missing = [
        p.label
        for p in template.placeholders
        if p.required and not _provided(values, p.key) and not p.default_value
    ]
    if missing:
        raise TemplateError(f"Missing required fields: {', '.join(missing)}")

    prompt = template.prompt
    for placeholder in template.placeholders:
        value = _provided(values, placeholder.key) or placeholder.default_value or ""
        prompt = prompt.replace(placeholder.key, value)
    return prompt


def validate_placeholder_values(
    template: DiscoveryTemplate, values: Mapping[str, str]
) -> tuple[bool, list[str]]:
    """Check user-supplied placeholder values before filling.

    Returns ``(valid, errors)``.
    """
    errors: list[str] = []
    for placeholder in template.placeholders:
        value = values.get(placeholder.key) or ""
        if placeholder.required and not value.strip() and not placeholder.default_value:
            errors.append(f"{placeholder.label} is required")
            continue
        if not value:
            continue
        if len(value) > MAX_PLACEHOLDER_LENGTH:
            errors.append(
                f"{placeholder.label} must be less than {MAX_PLACEHOLDER_LENGTH} characters"
            )
        if _UNSAFE_VALUE.search(value):
            errors.append(f"{placeholder.label} contains invalid characters")
    return not errors, errors
