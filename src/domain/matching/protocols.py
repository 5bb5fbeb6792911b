"""Protocols for matching components.

These protocols let the index and resolver accept any similarity algorithm
without depending on a particular library.
"""

from typing import Protocol


class SimilarityScorer(Protocol):
    """Callable returning a dissimilarity score in [0, 1].

    Implementations must return 0.0 for identical strings and stay within
    bounds for any input, including empty strings. Symmetry is not required.
    """

    def __call__(self, candidate: str | None, reference: str | None) -> float: ...
