"""Tests for name validation and the tiered candidate extractor."""

from __future__ import annotations

import pytest

from prospector.extraction import (
    ExtractionTier,
    combine_answers,
    extract_candidates,
    is_valid_person_name,
    normalize_name,
)
from prospector.extraction.entities import CONTEXT_AFTER, CONTEXT_BEFORE, context_window
from prospector.extraction.names import name_slug
from prospector.models.search import SearchResult


def structured_record(name: str) -> str:
    return (
        f"NAME: {name}\n"
        "TITLE: Managing Partner\n"
        "COMPANY: Granite Peak Capital\n"
        "LOCATION: Dallas, TX\n"
    )


class TestIsValidPersonName:
    @pytest.mark.parametrize(
        "name",
        ["John Smith", "Mary-Kate O'Neil", "Jane Doe", "Jean Claude Van Damme"],
    )
    def test_accepts(self, name: str):
        assert is_valid_person_name(name) is True

    @pytest.mark.parametrize(
        "name",
        [
            "John",
            "john smith",
            "Test User",
            "John Doe",
            "The Company",
            "J Smith",
            "John Smith3",
            "Jo -- Smith",
            "Jo '' Smith",
            "",
            "A" * 60 + " " + "B" * 60,
        ],
    )
    def test_rejects(self, name: str):
        assert is_valid_person_name(name) is False


class TestNormalizeName:
    def test_collapses_and_strips(self):
        assert normalize_name("  Mary-Kate   O'Neil ") == "marykate oneil"

    def test_slug(self):
        assert name_slug("Jane  Q. Public") == "jane-q-public"


class TestCombineAnswers:
    def test_joins_non_empty_answers(self):
        text = combine_answers(
            [SearchResult(answer="one"), SearchResult(answer=""), SearchResult(answer="two")]
        )
        assert text == "one\n\n---\n\ntwo"


class TestExtractCandidates:
    def test_structured_tier(self):
        text = structured_record("Eleanor Whitfield") + "\n" + structured_record("Marcus Bell")
        candidates = extract_candidates(text, max_results=10)
        assert [c.name for c in candidates] == ["Eleanor Whitfield", "Marcus Bell"]
        assert all(c.tier == ExtractionTier.STRUCTURED for c in candidates)

    def test_markdown_bold_tag(self):
        candidates = extract_candidates("**NAME:** Priya Raman\n", max_results=5)
        assert [c.name for c in candidates] == ["Priya Raman"]

    def test_role_adjacent_tier(self):
        text = (
            "Among local leaders, Rosa Delgado, CEO of Delgado Foods, chairs the gala. "
            "In addition Victor Huang is the Chairman of Huang Holdings.\n"
            "Also noted: Founder Amelia Ortiz of Ortiz Labs."
        )
        names = [c.name for c in extract_candidates(text, max_results=10)]
        assert names == ["Rosa Delgado", "Victor Huang", "Amelia Ortiz"]

    def test_emphasis_tier(self):
        text = 'Notable donors include **Harold Kim** and "Lucia Ferreira".'
        candidates = extract_candidates(text, max_results=10)
        assert [c.name for c in candidates] == ["Harold Kim", "Lucia Ferreira"]
        assert all(c.tier == ExtractionTier.EMPHASIS for c in candidates)

    def test_dedup_across_tiers(self):
        text = "NAME: Jane Doe\nTITLE: Trustee\n\nAs noted, **Jane Doe** gave generously."
        candidates = extract_candidates(text, max_results=10)
        assert [c.name for c in candidates] == ["Jane Doe"]
        assert candidates[0].tier == ExtractionTier.STRUCTURED

    def test_rejected_names_skipped(self):
        text = "NAME: John Doe\nNAME: Test User\nNAME: Olivia Grant\n"
        assert [c.name for c in extract_candidates(text, max_results=10)] == ["Olivia Grant"]

    def test_lowercase_name_not_extracted(self):
        assert extract_candidates("NAME: john smith\n", max_results=5) == []

    def test_stops_at_max_results(self):
        text = "".join(structured_record(n) for n in ["Ann Lee", "Bob Ray", "Cal Fox", "Dee Poe"])
        text += "\n**Eve Park** and **Fay Wong**"
        candidates = extract_candidates(text, max_results=3)
        assert [c.name for c in candidates] == ["Ann Lee", "Bob Ray", "Cal Fox"]

    def test_seen_set_threaded(self):
        seen: set[str] = set()
        extract_candidates("NAME: Olivia Grant\n", max_results=5, seen=seen)
        assert seen == {"olivia grant"}
        assert extract_candidates("**Olivia Grant**", max_results=5, seen=seen) == []

    def test_fresh_seen_per_call(self):
        text = "NAME: Olivia Grant\n"
        assert len(extract_candidates(text, max_results=5)) == 1
        assert len(extract_candidates(text, max_results=5)) == 1

    def test_zero_max_results(self):
        assert extract_candidates("NAME: Olivia Grant\n", max_results=0) == []


class TestContextWindow:
    def test_bounds(self):
        text = "x" * 100 + "NAME: Olivia Grant" + "y" * 1000
        window, offset = context_window(text, 100)
        assert offset == CONTEXT_BEFORE
        assert len(window) == CONTEXT_BEFORE + CONTEXT_AFTER

    def test_truncated_at_next_record(self):
        text = structured_record("Ann Lee") + structured_record("Bob Ray")
        window, offset = context_window(text, 0)
        assert offset == 0
        assert "Bob Ray" not in window
        assert "COMPANY: Granite Peak Capital" in window
