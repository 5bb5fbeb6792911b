"""Listening statistics derived from ledger snapshots."""

from .engine import (
    STATISTICS_CONFIG,
    check_availability,
    collection_summary,
    compute_snapshot,
    counted_albums,
    distinct_albums_and_artists,
    genre_percentage,
    genre_shares,
    least_played_album,
    ranked_albums,
    ranked_artists,
    top_album,
    top_artist_minutes,
    top_genres,
    total_listening,
)
from .types import (
    AlbumListening,
    ArtistListening,
    CollectionCounts,
    GenreListening,
    GenreShare,
    InsufficientData,
    ListeningDuration,
    NoData,
    StatisticsSnapshot,
)

__all__ = [
    "STATISTICS_CONFIG",
    "AlbumListening",
    "ArtistListening",
    "CollectionCounts",
    "GenreListening",
    "GenreShare",
    "InsufficientData",
    "ListeningDuration",
    "NoData",
    "StatisticsSnapshot",
    "check_availability",
    "collection_summary",
    "compute_snapshot",
    "counted_albums",
    "distinct_albums_and_artists",
    "genre_percentage",
    "genre_shares",
    "least_played_album",
    "ranked_albums",
    "ranked_artists",
    "top_album",
    "top_artist_minutes",
    "top_genres",
    "total_listening",
]
