"""Value types produced by the statistics engine.

Every statistic is either a value or one of the variants below; neither
variant is an error. ``InsufficientData`` in particular must be shown as
"not enough listening yet", never as zero.
"""

from attrs import define, field

from src.domain.entities.album import Album

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600


@define(frozen=True, slots=True)
class NoData:
    """No ledger entry maps to an album in the collection."""


@define(frozen=True, slots=True)
class InsufficientData:
    """Too little listening time has been recorded for statistics."""

    total_seconds: int
    required_seconds: int

    @property
    def remaining_seconds(self) -> int:
        """Listening still needed before statistics become available."""
        return max(0, self.required_seconds - self.total_seconds)


@define(frozen=True, slots=True)
class AlbumListening:
    """An album with the seconds it has been listened to."""

    album: Album
    seconds: int

    @property
    def minutes(self) -> int:
        return self.seconds // SECONDS_PER_MINUTE

    @property
    def hours(self) -> int:
        return self.seconds // SECONDS_PER_HOUR


@define(frozen=True, slots=True)
class ArtistListening:
    """An artist with listening time summed across their albums."""

    artist: str
    seconds: int

    @property
    def minutes(self) -> int:
        """Whole minutes, truncated."""
        return self.seconds // SECONDS_PER_MINUTE


@define(frozen=True, slots=True)
class GenreListening:
    """Seconds of listening that touched a style tag."""

    tag: str
    seconds: int


@define(frozen=True, slots=True)
class GenreShare:
    """A style tag with its seconds and percentage of all tag time."""

    tag: str
    seconds: int
    percentage: int


@define(frozen=True, slots=True)
class CollectionCounts:
    """Album and distinct-artist counts."""

    albums: int
    artists: int


@define(frozen=True, slots=True)
class ListeningDuration:
    """Listening time split into hours, minutes and seconds."""

    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total: int) -> "ListeningDuration":
        hours, remainder = divmod(total, SECONDS_PER_HOUR)
        minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)
        return cls(hours=hours, minutes=minutes, seconds=seconds)

    @property
    def total_seconds(self) -> int:
        return self.hours * SECONDS_PER_HOUR + self.minutes * SECONDS_PER_MINUTE + self.seconds


# Type aliases for clarity
AlbumResult = AlbumListening | NoData | InsufficientData
ArtistResult = ArtistListening | NoData | InsufficientData
CountsResult = CollectionCounts | InsufficientData
GenresResult = list[GenreListening] | InsufficientData
DurationResult = ListeningDuration | InsufficientData


@define(frozen=True, slots=True)
class StatisticsSnapshot:
    """Every presentation-ready figure, recomputed and replaced as a whole."""

    total_seconds: int
    required_seconds: int
    top_album: AlbumResult
    least_played_album: AlbumResult
    top_artist: ArtistResult
    listened: CountsResult
    genres: list[GenreShare] | InsufficientData
    total_listening: DurationResult
    ranked_albums: list[AlbumListening] | InsufficientData
    ranked_artists: list[ArtistListening] | InsufficientData
    collection: CollectionCounts = field(factory=lambda: CollectionCounts(0, 0))

    @property
    def available(self) -> bool:
        """Whether listening statistics have passed the availability floor."""
        return self.total_seconds >= self.required_seconds

    @property
    def top_genre(self) -> GenreShare | None:
        """Highest ranked genre, if statistics are available and any exist."""
        if isinstance(self.genres, InsufficientData) or not self.genres:
            return None
        return self.genres[0]
