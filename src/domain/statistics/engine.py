"""
Pure statistics over a ledger snapshot and the collection index.

Only ledger entries whose album id is in the index are counted; orphaned ids
are skipped silently. Every listening statistic is gated on the ledger's
total time: below ``min_listening_seconds`` the functions return
``InsufficientData`` instead of a value.

Tie-breaks are explicit so results never depend on dict order:
- albums: lowest album id
- artists: lexicographically smallest name
- genres: tag name ascending
"""

from math import inf

from toolz import concat, reduceby

from src.domain.collection.index import CollectionIndex
from src.domain.entities.album import Album
from src.domain.listening.ledger import LedgerSnapshot

from .types import (
    AlbumListening,
    AlbumResult,
    ArtistListening,
    ArtistResult,
    CollectionCounts,
    CountsResult,
    DurationResult,
    GenreListening,
    GenreShare,
    GenresResult,
    InsufficientData,
    ListeningDuration,
    NoData,
    StatisticsSnapshot,
)

# Statistics configuration
STATISTICS_CONFIG = {
    "min_listening_seconds": 1800,  # 30 minutes
    "ranking_limit": 5,
}

DEFAULT_MIN_SECONDS = STATISTICS_CONFIG["min_listening_seconds"]


# === Helpers ===


def check_availability(
    snapshot: LedgerSnapshot,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> InsufficientData | None:
    """InsufficientData when the ledger total is below the floor, else None."""
    total = snapshot.total_seconds
    if total < min_listening_seconds:
        return InsufficientData(total_seconds=total, required_seconds=min_listening_seconds)
    return None


def counted_albums(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
) -> list[AlbumListening]:
    """Ledger entries resolvable in the index, in ascending album id order."""
    return [
        AlbumListening(album=album, seconds=seconds)
        for album_id, seconds in snapshot.items()
        if isinstance(album := index.lookup_by_id(album_id), Album)
    ]


def _artist_totals(counted: list[AlbumListening]) -> dict[str, int]:
    return reduceby(
        lambda entry: entry.album.artist,
        lambda total, entry: total + entry.seconds,
        counted,
        0,
    )


def _genre_totals(counted: list[AlbumListening]) -> dict[str, int]:
    # Each album credits its full time to every one of its tags
    tagged = concat(
        ((tag, entry.seconds) for tag in dict.fromkeys(entry.album.styles))
        for entry in counted
    )
    return reduceby(
        lambda pair: pair[0],
        lambda total, pair: total + pair[1],
        tagged,
        0,
    )


def _rank_albums(counted: list[AlbumListening]) -> list[AlbumListening]:
    return sorted(counted, key=lambda entry: (-entry.seconds, entry.album.id))


def _rank_artists(counted: list[AlbumListening]) -> list[ArtistListening]:
    totals = _artist_totals(counted)
    return [
        ArtistListening(artist=artist, seconds=seconds)
        for artist, seconds in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


# === Album Statistics ===


def top_album(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> AlbumResult:
    """Most listened album."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    ranked = _rank_albums(counted_albums(snapshot, index))
    return ranked[0] if ranked else NoData()


def least_played_album(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> AlbumResult:
    """Least listened album among those with a ledger entry."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    least: AlbumListening | None = None
    least_seconds: float = inf
    for entry in counted_albums(snapshot, index):
        # Ascending id order, so strict comparison keeps the lowest id on ties
        if entry.seconds < least_seconds:
            least, least_seconds = entry, entry.seconds
    return least if least is not None else NoData()


def ranked_albums(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    limit: int | None = STATISTICS_CONFIG["ranking_limit"],
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> list[AlbumListening] | InsufficientData:
    """Albums by listened seconds, most first."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    ranked = _rank_albums(counted_albums(snapshot, index))
    return ranked[:limit] if limit is not None else ranked


# === Artist Statistics ===


def top_artist_minutes(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> ArtistResult:
    """Artist with the most listening time, summed over their albums."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    ranked = _rank_artists(counted_albums(snapshot, index))
    return ranked[0] if ranked else NoData()


def ranked_artists(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    limit: int | None = STATISTICS_CONFIG["ranking_limit"],
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> list[ArtistListening] | InsufficientData:
    """Artists by listened seconds, most first."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    ranked = _rank_artists(counted_albums(snapshot, index))
    return ranked[:limit] if limit is not None else ranked


def distinct_albums_and_artists(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> CountsResult:
    """Counts of listened albums and of their distinct artists."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    counted = counted_albums(snapshot, index)
    return CollectionCounts(
        albums=len(counted),
        artists=len({entry.album.artist for entry in counted}),
    )


# === Genre Statistics ===


def top_genres(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> GenresResult:
    """Style tags by listened seconds, most first.

    An album with several tags counts in full towards each of them, so the
    buckets overlap and are not a partition of listening time.
    """
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    totals = _genre_totals(counted_albums(snapshot, index))
    return [
        GenreListening(tag=tag, seconds=seconds)
        for tag, seconds in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


def genre_percentage(tag: str, all_genres: GenresResult) -> int | InsufficientData:
    """Share of all tag time spent in one tag, rounded up to a whole percent.

    The total is the sum of every tag bucket, and buckets overlap, so
    percentages across tags can add up to more than 100.
    """
    if isinstance(all_genres, InsufficientData):
        return all_genres

    total = sum(genre.seconds for genre in all_genres)
    tag_seconds = next((genre.seconds for genre in all_genres if genre.tag == tag), 0)
    if total <= 0 or tag_seconds <= 0:
        return 0
    # Integer ceiling avoids float rounding at exact percentages
    return -(-100 * tag_seconds // total)


def genre_shares(all_genres: GenresResult) -> list[GenreShare] | InsufficientData:
    """Ranked genres with their percentages attached."""
    if isinstance(all_genres, InsufficientData):
        return all_genres

    return [
        GenreShare(
            tag=genre.tag,
            seconds=genre.seconds,
            percentage=genre_percentage(genre.tag, all_genres),
        )
        for genre in all_genres
    ]


# === Totals ===


def total_listening(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
) -> DurationResult:
    """Listening time on known albums as hours, minutes and seconds."""
    if insufficient := check_availability(snapshot, min_listening_seconds):
        return insufficient

    return ListeningDuration.from_seconds(
        sum(entry.seconds for entry in counted_albums(snapshot, index))
    )


def collection_summary(index: CollectionIndex) -> CollectionCounts:
    """Size of the owned collection and its distinct artists.

    Describes the collection rather than listening, so it is never gated.
    """
    return CollectionCounts(albums=len(index), artists=len(index.artists()))


def compute_snapshot(
    snapshot: LedgerSnapshot,
    index: CollectionIndex,
    min_listening_seconds: int = DEFAULT_MIN_SECONDS,
    ranking_limit: int = STATISTICS_CONFIG["ranking_limit"],
) -> StatisticsSnapshot:
    """Compute every statistic at once into a StatisticsSnapshot."""
    genres = top_genres(snapshot, index, min_listening_seconds)
    return StatisticsSnapshot(
        total_seconds=snapshot.total_seconds,
        required_seconds=min_listening_seconds,
        top_album=top_album(snapshot, index, min_listening_seconds),
        least_played_album=least_played_album(snapshot, index, min_listening_seconds),
        top_artist=top_artist_minutes(snapshot, index, min_listening_seconds),
        listened=distinct_albums_and_artists(snapshot, index, min_listening_seconds),
        genres=genre_shares(genres),
        total_listening=total_listening(snapshot, index, min_listening_seconds),
        ranked_albums=ranked_albums(snapshot, index, ranking_limit, min_listening_seconds),
        ranked_artists=ranked_artists(snapshot, index, ranking_limit, min_listening_seconds),
        collection=collection_summary(index),
    )
