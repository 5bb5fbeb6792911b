"""Album-related domain entities.

Pure album representations with zero external dependencies beyond attrs.
"""

from collections.abc import Iterable

import attrs
from attrs import define, field, validators


def _to_tuple(values: Iterable[str] | None) -> tuple[str, ...]:
    return tuple(values) if values is not None else ()


def _to_track_tuple(tracks: Iterable["Track"] | None) -> tuple["Track", ...] | None:
    return tuple(tracks) if tracks is not None else None


@define(frozen=True, slots=True)
class Track:
    """A single track on an album.

    Positions are catalog labels ("A1", "B2", "3"), not numbers.
    """

    position: str = field(validator=validators.instance_of(str))
    title: str = field(validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class Album:
    """Immutable vinyl release owned by the user.

    The catalog id is assigned externally and identifies the album within a
    collection. Styles and tracks are stored as tuples so a held reference can
    never change underneath its reader; a re-fetch produces a new Album.
    """

    id: int = field(validator=validators.instance_of(int))
    title: str = field(validator=validators.instance_of(str))
    artist: str = field(validator=validators.instance_of(str))
    release_year: str = field(default="", validator=validators.instance_of(str))
    styles: tuple[str, ...] = field(
        factory=tuple,
        converter=_to_tuple,
        validator=validators.deep_iterable(
            member_validator=validators.instance_of(str),
        ),
    )
    tracks: tuple[Track, ...] | None = field(
        default=None,
        converter=_to_track_tuple,
        validator=validators.optional(
            validators.deep_iterable(member_validator=validators.instance_of(Track)),
        ),
    )
    cover_image_url: str | None = field(default=None)

    @property
    def has_tracklist(self) -> bool:
        """Whether the album carries a non-empty track list."""
        return bool(self.tracks)

    def with_tracks(self, tracks: Iterable[Track]) -> "Album":
        """Create a new album with the given track list."""
        return attrs.evolve(self, tracks=tuple(tracks))

    def display_title(self, max_length: int = 32) -> str:
        """Title shortened for compact display."""
        if len(self.title) > max_length:
            return self.title[:max_length] + "..."
        return self.title
