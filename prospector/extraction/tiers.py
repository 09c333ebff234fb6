"""Ordered name-extraction strategies, from most to least precise.

Each tier owns a set of compiled patterns whose first group captures a
candidate name. Name tokens are matched case-sensitively (a real name is
capitalized) while surrounding keywords are matched case-insensitively.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

# One capitalized name token: "Smith", "McDonald", "O'Brien", "Smith-Jones".
NAME_TOKEN = r"[A-Z][A-Za-z'\-]*[a-z]"


def name_pattern(extra_tokens: int) -> str:
    """A first token plus 1..extra_tokens more, on a single line."""
    return rf"{NAME_TOKEN}(?:[ \t]+{NAME_TOKEN}){{1,{extra_tokens}}}"


_FULL_NAME = name_pattern(4)
_SHORT_NAME = name_pattern(3)

_LEAD_ROLES = r"CEO|CFO|COO|CTO|President|Chairman|Founder|Director|Partner|Trustee|Executive"
_STATED_ROLES = r"CEO|CFO|President|Chairman|Founder|Director|Partner|Trustee"
_PREFIX_ROLES = r"CEO|CFO|President|Chairman|Founder|Director"


class ExtractionTier(StrEnum):
    """Extraction pass, in descending precision."""

    STRUCTURED = "structured"
    ROLE_ADJACENT = "role_adjacent"
    EMPHASIS = "emphasis"

    @property
    def precedence(self) -> int:
        return list(ExtractionTier).index(self)


@dataclass(frozen=True)
class NameMatch:
    name: str
    start: int


@dataclass(frozen=True)
class TierStrategy:
    tier: ExtractionTier
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, text: str) -> Iterator[NameMatch]:
        """Yield raw name matches, pattern by pattern, in text order."""
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                yield NameMatch(name=match.group(1).strip(), start=match.start())


STRUCTURED_STRATEGY = TierStrategy(
    tier=ExtractionTier.STRUCTURED,
    patterns=(
        re.compile(
            rf"(?i:\bNAME)\**:[ \t*]*({_FULL_NAME})[ \t*]*$",
            re.MULTILINE,
        ),
    ),
)

ROLE_ADJACENT_STRATEGY = TierStrategy(
    tier=ExtractionTier.ROLE_ADJACENT,
    patterns=(
        # "Jane Smith, CEO of Acme"
        re.compile(rf"({_SHORT_NAME})[ \t]*,[ \t]*(?i:the[ \t]+)?(?i:{_LEAD_ROLES})[^\n]*"),
        # "Jane Smith is the Chairman"
        re.compile(
            rf"({_SHORT_NAME})[ \t]+(?i:is|was|serves?[ \t]+as|works?[ \t]+as)[ \t]+"
            rf"(?i:the[ \t]+)?(?i:{_STATED_ROLES})[^\n]*"
        ),
        # "Chairman Jane Smith"
        re.compile(rf"(?i:\b(?:{_PREFIX_ROLES}))[ \t]+({_SHORT_NAME})"),
    ),
)

EMPHASIS_STRATEGY = TierStrategy(
    tier=ExtractionTier.EMPHASIS,
    patterns=(
        re.compile(rf"\*\*({_SHORT_NAME})\*\*"),
        re.compile(rf"[\"\u201c]({_SHORT_NAME})[\"\u201d]"),
    ),
)

TIER_PIPELINE: tuple[TierStrategy, ...] = (
    STRUCTURED_STRATEGY,
    ROLE_ADJACENT_STRATEGY,
    EMPHASIS_STRATEGY,
)
