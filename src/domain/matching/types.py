"""Pure domain types for matching detections to collection albums.

Lookups and resolutions that can legitimately fail return one of these
variants instead of raising; callers branch on the type.
"""

from attrs import define

from src.domain.entities.album import Album


@define(frozen=True, slots=True)
class TitleMatch:
    """Best fuzzy title match in a collection with its combined score."""

    album: Album
    score: float


@define(frozen=True, slots=True)
class NotFound:
    """No album with this id is in the collection."""

    album_id: int


@define(frozen=True, slots=True)
class NoCandidates:
    """The collection had nothing to score against, or no text was given."""


@define(frozen=True, slots=True)
class Unresolved:
    """A detection that could not be confidently matched to an owned album.

    Reasons:
        silence: the recognizer reported nothing playing
        no_candidates: empty collection or no usable text
        below_threshold: the best match was too dissimilar to trust
    """

    reason: str
    best_album_id: int | None = None
    best_score: float | None = None


# Type aliases for clarity
LookupResult = Album | NotFound
TitleMatchResult = TitleMatch | NoCandidates
