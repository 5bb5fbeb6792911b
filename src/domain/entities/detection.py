"""Detection-related domain entities.

A detection is one audio-recognition observation of the song currently
playing. Detections are ephemeral: they are resolved, applied to the ledger
and dropped.
"""

from datetime import datetime

from attrs import define, field, validators

from .album import Track
from .shared import ensure_utc


def _require_utc(value: datetime) -> datetime:
    return ensure_utc(value)  # type: ignore[return-value]


@define(frozen=True, slots=True)
class DetectionEvent:
    """Raw recognized song with the time it was heard."""

    title: str = field(validator=validators.instance_of(str))
    artist: str = field(validator=validators.instance_of(str))
    detected_at: datetime = field(
        converter=_require_utc,
        validator=validators.instance_of(datetime),
    )
    album: str | None = field(default=None)
    external_id: str | None = field(default=None)

    @classmethod
    def silence(cls, at: datetime) -> "DetectionEvent":
        """Explicit "nothing currently playing" observation."""
        return cls(title="", artist="", detected_at=at)

    @property
    def is_silence(self) -> bool:
        """True when the recognizer reported nothing playing."""
        return not self.title and not self.artist and not self.album

    @property
    def album_text(self) -> str:
        """Text used for album-level matching: the album hint, else the title."""
        return self.album or self.title

    @property
    def identity(self) -> str:
        """Key used to count repeated recognitions of the same song."""
        if self.external_id:
            return self.external_id
        return f"{self.artist.casefold()}\x1f{self.title.casefold()}"


@define(frozen=True, slots=True)
class ResolvedPlay:
    """A detection resolved to an owned album and, optionally, one of its tracks.

    Confidence is the matcher's dissimilarity score: lower is better and 0.0
    means an exact match.
    """

    album_id: int
    confidence: float = field(
        validator=[validators.instance_of(float), validators.ge(0.0), validators.le(1.0)],
    )
    track: Track | None = None
