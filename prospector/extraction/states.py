"""US state name/abbreviation lookup."""

from __future__ import annotations

STATE_NAME_TO_ABBREV: dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}

VALID_STATE_ABBREVS = frozenset(STATE_NAME_TO_ABBREV.values())

# Abbreviations that are also everyday uppercase words; too noisy to trust
# without a preceding "City," anchor.
AMBIGUOUS_ABBREVS = frozenset({"HI", "ID", "IN", "ME", "OH", "OK", "OR"})


def normalize_state(value: str | None) -> str | None:
    """Map a state name or abbreviation to its 2-letter code.

    Only exact matches count: "Te" is not Texas and is rejected.

    >>> normalize_state("Texas")
    'TX'
    >>> normalize_state("tx")
    'TX'
    >>> normalize_state("Te") is None
    True
    """
    if not value:
        return None
    trimmed = " ".join(value.strip().rstrip(".").split())
    if len(trimmed) == 2 and trimmed.upper() in VALID_STATE_ABBREVS:
        return trimmed.upper()
    return STATE_NAME_TO_ABBREV.get(trimmed.lower())


def state_alternation(*, include_ambiguous: bool = True) -> str:
    """Regex alternation of full names (any case) then uppercase codes."""
    names = sorted(STATE_NAME_TO_ABBREV, key=len, reverse=True)
    full = "|".join(name.replace(" ", r"[ \t]+") for name in names)
    codes = sorted(
        code for code in VALID_STATE_ABBREVS if include_ambiguous or code not in AMBIGUOUS_ABBREVS
    )
    return rf"(?i:{full})|{'|'.join(codes)}"
