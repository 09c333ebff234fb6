"""Person-name validation and dedup-key normalization."""

from __future__ import annotations

import re

_NAME_CHARS = re.compile(r"^[A-Za-z\s\-']+$")

# Placeholder strings generative search emits when it has no real person.
PLACEHOLDER_NAMES = frozenset(
    {
        "the company",
        "this person",
        "john doe",
        "test user",
        "no name",
        "not available",
        "not found",
        "unknown person",
    }
)


def is_valid_person_name(name: str) -> bool:
    """Check that *name* looks like a real person's full name.

    >>> is_valid_person_name("John Smith")
    True
    >>> is_valid_person_name("John")
    False
    """
    if not name or not isinstance(name, str):
        return False

    trimmed = name.strip()
    parts = trimmed.split()
    if len(parts) < 2 or any(sum(c.isalpha() for c in part) < 2 for part in parts):
        return False
    if not _NAME_CHARS.match(trimmed):
        return False
    if not trimmed[0].isupper():
        return False
    if trimmed.lower() in PLACEHOLDER_NAMES:
        return False
    return 4 <= len(trimmed) <= 100


def normalize_name(name: str) -> str:
    """Dedup key: lowercase, whitespace-collapsed, punctuation-stripped."""
    collapsed = re.sub(r"\s+", " ", name.lower().strip())
    return re.sub(r"[^\w\s]", "", collapsed)


def name_slug(name: str) -> str:
    return re.sub(r"\s+", "-", normalize_name(name))
