"""Pure algorithms for fuzzy matching of recognized songs to owned albums.

Scores are dissimilarities in [0, 1]: 0.0 means identical and 1.0 means the
strings share nothing the fuzzy matcher can use.
"""

from rapidfuzz import fuzz, utils

from .types import TitleMatch

# Matching configuration
MATCHING_CONFIG = {
    "exact_score": 0.0,
    "worst_score": 1.0,
    # Weighted average of title and artist scores
    "title_weight": 0.7,
    "artist_weight": 0.3,
    # Scores closer than this to the best are ties
    "tie_epsilon": 1e-9,
    # Detections scoring above this are not trusted
    "acceptance_threshold": 0.4,
}


def score(candidate: str | None, reference: str | None) -> float:
    """Dissimilarity between a recognized string and a collection string.

    Exact (case-sensitive) equality short-circuits to 0.0. Otherwise the
    rapidfuzz token-sort ratio is used, which ignores case, punctuation and
    word order. A ratio of zero means no usable structure and scores 1.0.
    """
    candidate = candidate or ""
    reference = reference or ""

    if candidate == reference:
        return MATCHING_CONFIG["exact_score"]

    ratio = fuzz.token_sort_ratio(candidate, reference, processor=utils.default_process)
    if ratio <= 0:
        return MATCHING_CONFIG["worst_score"]

    return min(1.0, max(0.0, 1.0 - ratio / 100.0))


def combine_scores(
    title_score: float | None,
    artist_score: float | None,
    title_weight: float = MATCHING_CONFIG["title_weight"],
    artist_weight: float = MATCHING_CONFIG["artist_weight"],
) -> float | None:
    """Weighted average of title and artist scores.

    When only one side is available it is used alone; with neither there is
    nothing to combine and None is returned.
    """
    if title_score is None and artist_score is None:
        return None
    if artist_score is None or artist_weight == 0:
        return title_score if title_score is not None else artist_score
    if title_score is None:
        return artist_score

    return (title_weight * title_score + artist_weight * artist_score) / (
        title_weight + artist_weight
    )


def is_better_match(
    candidate: TitleMatch,
    best: TitleMatch | None,
    tie_epsilon: float = MATCHING_CONFIG["tie_epsilon"],
) -> bool:
    """Whether candidate should replace best.

    Scores within tie_epsilon of each other are ties, won by the lower album
    id, so the outcome never depends on iteration order.
    """
    if best is None:
        return True
    if candidate.score < best.score - tie_epsilon:
        return True
    if abs(candidate.score - best.score) <= tie_epsilon:
        return candidate.album.id < best.album.id
    return False
