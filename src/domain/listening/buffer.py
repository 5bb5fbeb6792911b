"""Smoothing of raw recognitions before resolution.

Recognizers report the same song many times and occasionally misidentify a
few seconds of a long intro. The buffer groups recognitions into fixed
windows of event time and keeps only the most frequent song of each window,
dropping it when it repeats the song emitted last. Emitted events keep their
original timestamps, so arrival order is preserved downstream.
"""

from collections import Counter
from datetime import datetime, timedelta

from attrs import define, field, validators

from src.config import get_logger
from src.domain.entities.detection import DetectionEvent

logger = get_logger(__name__)


@define(slots=True)
class DetectionBuffer:
    """Windowed most-frequent filter over DetectionEvents.

    Attributes:
        window_seconds: Length of each window in event time
        min_detections: Recognitions a song needs within a window to be emitted
    """

    window_seconds: int = field(validator=validators.ge(1))
    min_detections: int = field(default=1, validator=validators.ge(1))
    _pending: list[DetectionEvent] = field(factory=list, init=False)
    _window_start: datetime | None = field(default=None, init=False)
    _last_emitted: str | None = field(default=None, init=False)

    def add(self, event: DetectionEvent) -> list[DetectionEvent]:
        """Buffer one recognition, returning any events released by it."""
        if event.is_silence:
            before_silence = self.flush()
            self._last_emitted = None
            return [*before_silence, event]

        released: list[DetectionEvent] = []
        if self._window_start is not None and event.detected_at >= self._window_start + timedelta(
            seconds=self.window_seconds
        ):
            released = self.flush()

        if self._window_start is None:
            self._window_start = event.detected_at
        self._pending.append(event)
        return released

    def reset(self) -> None:
        """Discard the open window and forget the last emitted song."""
        self._pending = []
        self._window_start = None
        self._last_emitted = None

    def flush(self) -> list[DetectionEvent]:
        """Close the current window and release its winner, if any."""
        pending, self._pending = self._pending, []
        self._window_start = None
        if not pending:
            return []

        counts = Counter(event.identity for event in pending)
        # Counter.most_common keeps first-seen order among equal counts
        identity, count = counts.most_common(1)[0]

        if count < self.min_detections:
            logger.debug(
                f"Dropping window of {len(pending)} detections: best song seen "
                f"{count} time(s), need {self.min_detections}"
            )
            return []

        if identity == self._last_emitted:
            logger.debug("Song already detected, skipping", identity=identity)
            return []

        winner = next(event for event in pending if event.identity == identity)
        self._last_emitted = identity
        return [winner]
