"""Listening session state machine.

A session turns an ordered stream of resolution outcomes into listened time.
Recognition only tells us what is playing *now*, so the time attributed to a
play is only known once the next observation arrives: each event closes the
currently open play at its own timestamp and, if it resolved to an album,
opens a new one. The newest play always stays open.

Events must be fed in arrival order by a single consumer; the session itself
is not locked. The ledger it writes to is.
"""

from collections import deque
from datetime import datetime

from attrs import define, field, validators

from src.config import get_logger
from src.domain.entities.album import Track
from src.domain.entities.detection import DetectionEvent, ResolvedPlay
from src.domain.entities.shared import elapsed_seconds, ensure_utc
from src.domain.matching.types import Unresolved

from .ledger import ListeningLedger

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class OpenPlay:
    """The album currently believed to be playing."""

    album_id: int
    started_at: datetime
    track: Track | None = None


@define(frozen=True, slots=True)
class ClosedPlay:
    """A finished play and the seconds credited to its album."""

    album_id: int
    started_at: datetime
    ended_at: datetime
    seconds: int
    track: Track | None = None
    capped: bool = False


@define(slots=True)
class ListeningSession:
    """Attributes elapsed time between consecutive detections to the ledger.

    Attributes:
        ledger: Ledger receiving closed plays
        max_gap_seconds: Longest time a single play may be credited with.
            Longer gaps (an app left open overnight) are capped. None disables
            the cap.
        history_size: Number of recent closed plays kept for inspection
    """

    ledger: ListeningLedger
    max_gap_seconds: int | None = 1800
    history_size: int = field(default=100, validator=validators.ge(1))
    active: bool = field(default=False, init=False)
    _open_play: OpenPlay | None = field(default=None, init=False)
    _history: deque[ClosedPlay] = field(init=False)

    @_history.default
    def _history_default(self) -> deque[ClosedPlay]:
        return deque(maxlen=self.history_size)

    @property
    def now_playing(self) -> OpenPlay | None:
        """The open play, if any."""
        return self._open_play

    def history(self) -> tuple[ClosedPlay, ...]:
        """Most recent closed plays, oldest first."""
        return tuple(self._history)

    def start(self, at: datetime) -> None:
        """Begin accepting detections. Accumulated ledger state is kept."""
        if self.active:
            return
        self.active = True
        self._open_play = None
        logger.info("Listening session started", started_at=ensure_utc(at))

    def stop(self, at: datetime) -> ClosedPlay | None:
        """Stop accepting detections, closing the open play as of ``at``."""
        if not self.active:
            return None
        closed = self._close_open_play(ensure_utc(at))
        self.active = False
        logger.info("Listening session stopped", stopped_at=ensure_utc(at))
        return closed

    def observe(
        self,
        event: DetectionEvent,
        resolution: ResolvedPlay | Unresolved,
    ) -> ClosedPlay | None:
        """Apply one resolved or unresolved detection, in arrival order.

        Returns the play closed by this event, if there was one.
        """
        if not self.active:
            logger.debug("Ignoring detection while session is stopped", title=event.title)
            return None

        closed = self._close_open_play(event.detected_at)

        if isinstance(resolution, ResolvedPlay):
            self._open_play = OpenPlay(
                album_id=resolution.album_id,
                started_at=event.detected_at,
                track=resolution.track,
            )
        else:
            self._open_play = None

        return closed

    def _close_open_play(self, at: datetime) -> ClosedPlay | None:
        open_play = self._open_play
        if open_play is None:
            return None
        self._open_play = None

        seconds = elapsed_seconds(open_play.started_at, at)
        capped = False
        if seconds < 0:
            logger.warning(
                f"Detection at {at.isoformat()} precedes open play start "
                f"{open_play.started_at.isoformat()}, crediting nothing"
            )
            seconds = 0
        elif self.max_gap_seconds is not None and seconds > self.max_gap_seconds:
            logger.debug(
                f"Capping {seconds}s play of album {open_play.album_id} "
                f"to {self.max_gap_seconds}s"
            )
            seconds = self.max_gap_seconds
            capped = True

        self.ledger.record_play(open_play.album_id, seconds)

        closed = ClosedPlay(
            album_id=open_play.album_id,
            started_at=open_play.started_at,
            ended_at=at,
            seconds=seconds,
            track=open_play.track,
            capped=capped,
        )
        self._history.append(closed)
        return closed
