"""In-memory, immutable index over the user's owned albums.

An index is built once from a batch of albums and never mutated afterwards.
Incremental loading produces a new index per page via ``with_albums``, so a
reader holding an index always sees a complete, consistent set of entries.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from attrs import define, field

from src.domain.entities.album import Album
from src.domain.errors import DuplicateIdError
from src.domain.matching.algorithms import (
    MATCHING_CONFIG,
    combine_scores,
    is_better_match,
    score,
)
from src.domain.matching.protocols import SimilarityScorer
from src.domain.matching.types import (
    LookupResult,
    NoCandidates,
    NotFound,
    TitleMatch,
    TitleMatchResult,
)


def _index_albums(albums: Iterable[Album], into: dict[int, Album]) -> dict[int, Album]:
    for album in albums:
        if album.id in into:
            raise DuplicateIdError(album.id)
        into[album.id] = album
    return into


@define(frozen=True, slots=True)
class CollectionIndex:
    """Read-only id→Album mapping with fuzzy title lookup.

    Use ``CollectionIndex.build`` rather than the constructor so duplicate ids
    are rejected.
    """

    _albums: Mapping[int, Album] = field(alias="albums")
    _ordered_ids: tuple[int, ...] = field(alias="ordered_ids")
    scorer: SimilarityScorer = field(default=score, kw_only=True, eq=False)
    title_weight: float = field(default=MATCHING_CONFIG["title_weight"], kw_only=True)
    artist_weight: float = field(default=MATCHING_CONFIG["artist_weight"], kw_only=True)
    tie_epsilon: float = field(default=MATCHING_CONFIG["tie_epsilon"], kw_only=True)

    @classmethod
    def build(
        cls,
        albums: Iterable[Album] = (),
        *,
        scorer: SimilarityScorer = score,
        title_weight: float = MATCHING_CONFIG["title_weight"],
        artist_weight: float = MATCHING_CONFIG["artist_weight"],
        tie_epsilon: float = MATCHING_CONFIG["tie_epsilon"],
    ) -> "CollectionIndex":
        """Build an index from albums.

        Raises:
            DuplicateIdError: if two albums share an id
            ValueError: if the artist weight exceeds the title weight
        """
        if title_weight < artist_weight:
            raise ValueError("title_weight must be >= artist_weight")

        by_id = _index_albums(albums, {})
        return cls(
            albums=MappingProxyType(by_id),
            ordered_ids=tuple(sorted(by_id)),
            scorer=scorer,
            title_weight=title_weight,
            artist_weight=artist_weight,
            tie_epsilon=tie_epsilon,
        )

    @classmethod
    def empty(cls, **kwargs) -> "CollectionIndex":
        """Index with no albums, the starting point of an incremental load."""
        return cls.build((), **kwargs)

    def with_albums(self, albums: Iterable[Album]) -> "CollectionIndex":
        """New index holding this index's albums plus the given ones.

        Raises:
            DuplicateIdError: if an album id is already present or repeated
        """
        by_id = _index_albums(albums, dict(self._albums))
        return CollectionIndex(
            albums=MappingProxyType(by_id),
            ordered_ids=tuple(sorted(by_id)),
            scorer=self.scorer,
            title_weight=self.title_weight,
            artist_weight=self.artist_weight,
            tie_epsilon=self.tie_epsilon,
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def lookup_by_id(self, album_id: int) -> LookupResult:
        """Album with this id, or NotFound."""
        album = self._albums.get(album_id)
        if album is None:
            return NotFound(album_id)
        return album

    def find_best_title_match(
        self,
        raw_title: str | None,
        raw_artist: str | None = None,
    ) -> TitleMatchResult:
        """Album whose title (and artist) best matches the raw strings.

        Each album's title is scored against raw_title and, when a raw artist
        is given, its artist against raw_artist. The weighted combination
        with the lowest score wins; ties go to the lowest album id.
        """
        if not self._ordered_ids or (not raw_title and not raw_artist):
            return NoCandidates()

        best: TitleMatch | None = None
        for album_id in self._ordered_ids:
            album = self._albums[album_id]
            title_score = self.scorer(raw_title, album.title) if raw_title else None
            artist_score = self.scorer(raw_artist, album.artist) if raw_artist else None
            combined = combine_scores(
                title_score,
                artist_score,
                title_weight=self.title_weight,
                artist_weight=self.artist_weight,
            )
            if combined is None:
                continue

            candidate = TitleMatch(album=album, score=combined)
            if is_better_match(candidate, best, self.tie_epsilon):
                best = candidate

        return best if best is not None else NoCandidates()

    # -------------------------------------------------------------------------
    # Collection views
    # -------------------------------------------------------------------------

    def albums(self) -> list[Album]:
        """All albums in ascending id order."""
        return [self._albums[album_id] for album_id in self._ordered_ids]

    def artists(self) -> set[str]:
        """Distinct artist names in the collection."""
        return {album.artist for album in self._albums.values()}

    def __len__(self) -> int:
        return len(self._ordered_ids)

    def __contains__(self, album_id: object) -> bool:
        return album_id in self._albums

    def __iter__(self) -> Iterator[Album]:
        return iter(self.albums())
