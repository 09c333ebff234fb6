"""Entity, detail and confidence extraction from free-text search answers."""

from prospector.extraction.entities import Candidate, combine_answers, extract_candidates
from prospector.extraction.names import is_valid_person_name, normalize_name
from prospector.extraction.pipeline import build_prospect, extract_prospects
from prospector.extraction.states import normalize_state
from prospector.extraction.tiers import TIER_PIPELINE, ExtractionTier

__all__ = [
    "TIER_PIPELINE",
    "Candidate",
    "ExtractionTier",
    "build_prospect",
    "combine_answers",
    "extract_candidates",
    "extract_prospects",
    "is_valid_person_name",
    "normalize_name",
    "normalize_state",
]
