"""Fuzzy matching of recognized songs against the owned collection."""

from .algorithms import MATCHING_CONFIG, combine_scores, is_better_match, score
from .protocols import SimilarityScorer
from .resolver import DetectionResolver, ResolutionResult
from .types import (
    LookupResult,
    NoCandidates,
    NotFound,
    TitleMatch,
    TitleMatchResult,
    Unresolved,
)

__all__ = [
    "MATCHING_CONFIG",
    "DetectionResolver",
    "LookupResult",
    "NoCandidates",
    "NotFound",
    "ResolutionResult",
    "SimilarityScorer",
    "TitleMatch",
    "TitleMatchResult",
    "Unresolved",
    "combine_scores",
    "is_better_match",
    "score",
]
