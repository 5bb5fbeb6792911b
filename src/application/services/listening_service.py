"""Listening service coordinating detections, collection loading and statistics.

Runs on a single asyncio event loop. The detection consumer and the
collection loader are independent tasks that interleave at their await
points: the consumer resolves each event against whatever index the loader
has published so far, strictly in arrival order, and the read side pulls an
immutable StatisticsSnapshot whenever it wants one.

Example:
    ```python
    service = ListeningService.from_settings()
    service.subscribe(render)
    await service.run(recognizer.events(), catalog.collection_pages())
    stats = service.statistics()
    ```
"""

import asyncio
from collections.abc import AsyncIterable, Awaitable, Callable, Iterable
from datetime import datetime

from src.config import Settings, get_logger, settings as default_settings
from src.domain.collection.index import CollectionIndex
from src.domain.entities.album import Album
from src.domain.entities.detection import DetectionEvent
from src.domain.errors import DuplicateIdError
from src.domain.listening.buffer import DetectionBuffer
from src.domain.listening.ledger import LedgerSnapshot, ListeningLedger
from src.domain.listening.session import ClosedPlay, ListeningSession
from src.domain.matching.resolver import DetectionResolver, ResolutionResult
from src.domain.matching.types import Unresolved
from src.domain.statistics.engine import compute_snapshot
from src.domain.statistics.types import StatisticsSnapshot

from .collection_loader import CollectionLoader, CollectionPages

logger = get_logger(__name__)

StatisticsListener = Callable[[StatisticsSnapshot], Awaitable[None] | None]


class ListeningService:
    """Drives one listening session end to end."""

    def __init__(
        self,
        loader: CollectionLoader | None = None,
        resolver: DetectionResolver | None = None,
        ledger: ListeningLedger | None = None,
        buffer: DetectionBuffer | None = None,
        max_play_gap_seconds: int | None = 1800,
        history_size: int = 100,
        min_listening_seconds: int = 1800,
        ranking_limit: int = 5,
    ) -> None:
        self.loader = loader or CollectionLoader()
        self.resolver = resolver or DetectionResolver()
        self.ledger = ledger or ListeningLedger()
        self.session = ListeningSession(
            self.ledger,
            max_gap_seconds=max_play_gap_seconds,
            history_size=history_size,
        )
        self.buffer = buffer
        self.min_listening_seconds = min_listening_seconds
        self.ranking_limit = ranking_limit

        self._listeners: list[StatisticsListener] = []
        self._latest: StatisticsSnapshot | None = None
        self._detections_seen = 0
        self._unresolved_count = 0
        self._started = False

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "ListeningService":
        """Build a service wired from application settings."""
        config = config or default_settings
        matching = config.matching
        listening = config.listening

        buffer = None
        if listening.buffer_window_seconds > 0:
            buffer = DetectionBuffer(
                window_seconds=listening.buffer_window_seconds,
                min_detections=listening.buffer_min_detections,
            )

        return cls(
            loader=CollectionLoader(
                title_weight=matching.title_weight,
                artist_weight=matching.artist_weight,
                tie_epsilon=matching.tie_epsilon,
            ),
            resolver=DetectionResolver(acceptance_threshold=matching.acceptance_threshold),
            buffer=buffer,
            max_play_gap_seconds=listening.max_play_gap_seconds,
            history_size=listening.history_size,
            min_listening_seconds=config.statistics.min_listening_seconds,
            ranking_limit=config.statistics.ranking_limit,
        )

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def index(self) -> CollectionIndex:
        """Collection index currently used for resolution."""
        return self.loader.current

    @property
    def detections_seen(self) -> int:
        return self._detections_seen

    @property
    def unresolved_count(self) -> int:
        return self._unresolved_count

    def ledger_snapshot(self) -> LedgerSnapshot:
        """Immutable copy of accumulated listening time."""
        return self.ledger.snapshot()

    def statistics(self) -> StatisticsSnapshot:
        """Recompute statistics from the current ledger and index."""
        self._latest = compute_snapshot(
            self.ledger.snapshot(),
            self.index,
            min_listening_seconds=self.min_listening_seconds,
            ranking_limit=self.ranking_limit,
        )
        return self._latest

    @property
    def latest_statistics(self) -> StatisticsSnapshot | None:
        """Snapshot from the last recompute, without recomputing."""
        return self._latest

    def subscribe(self, listener: StatisticsListener) -> Callable[[], None]:
        """Register a listener called with fresh statistics after each change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Session control
    # -------------------------------------------------------------------------

    def start(self, at: datetime) -> None:
        """Start (or restart) accepting detections. The ledger is kept."""
        self._started = True
        if self.buffer is not None and not self.session.active:
            self.buffer.reset()
        self.session.start(at)

    async def stop(self, at: datetime) -> ClosedPlay | None:
        """Stop the session, closing the open play as of ``at``."""
        if self.buffer is not None:
            for event in self.buffer.flush():
                await self._apply(event)

        closed = self.session.stop(at)
        if closed is not None:
            await self._notify()
        return closed

    async def reset(self) -> None:
        """Clear accumulated listening time at a session boundary."""
        self.ledger.reset()
        logger.info("Listening ledger reset")
        await self._notify()

    # -------------------------------------------------------------------------
    # Write side
    # -------------------------------------------------------------------------

    async def handle_detection(self, event: DetectionEvent) -> list[ClosedPlay]:
        """Process one raw detection in arrival order.

        Returns:
            Plays closed as a result, possibly none
        """
        self._detections_seen += 1
        if not self.session.active:
            logger.debug("Dropping detection while session is stopped", title=event.title)
            return []

        released = self.buffer.add(event) if self.buffer is not None else [event]

        closed_plays = []
        for ready in released:
            closed = await self._apply(ready)
            if closed is not None:
                closed_plays.append(closed)
        return closed_plays

    async def consume(
        self,
        detections: AsyncIterable[DetectionEvent],
        auto_start: bool = True,
    ) -> None:
        """Process a detection stream until it ends.

        Args:
            detections: Events in arrival order
            auto_start: Start the session at the first event if it was never
                started. A session stopped explicitly stays stopped.
        """
        async for event in detections:
            if auto_start and not self._started:
                self.start(event.detected_at)
            await self.handle_detection(event)

        if self.buffer is not None:
            for event in self.buffer.flush():
                await self._apply(event)

    async def load_collection(
        self,
        source: Iterable[Album] | CollectionPages,
    ) -> CollectionIndex:
        """Load (or refresh) the collection, then notify listeners.

        A load rejected for a duplicate album id fails on its own: the last
        published index stays current and detections keep resolving against it.
        """
        try:
            index = await self.loader.load(source)
        except DuplicateIdError:
            index = self.loader.current
            logger.warning(f"Keeping collection of {len(index)} albums after failed load")
        await self._notify()
        return index

    async def run(
        self,
        detections: AsyncIterable[DetectionEvent],
        collection: Iterable[Album] | CollectionPages,
        auto_start: bool = True,
    ) -> StatisticsSnapshot:
        """Load the collection and consume detections concurrently.

        Returns:
            Statistics once both the load and the stream have finished
        """
        async with asyncio.TaskGroup() as group:
            group.create_task(self.load_collection(collection))
            group.create_task(self.consume(detections, auto_start=auto_start))

        logger.info(
            f"Session processed {self._detections_seen} detections, "
            f"{self._unresolved_count} unresolved"
        )
        return self.statistics()

    async def _apply(self, event: DetectionEvent) -> ClosedPlay | None:
        resolution: ResolutionResult = self.resolver.resolve(event, self.index)
        if isinstance(resolution, Unresolved) and resolution.reason != "silence":
            self._unresolved_count += 1

        closed = self.session.observe(event, resolution)
        if closed is not None:
            await self._notify()
        return closed

    async def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.statistics()
        for listener in list(self._listeners):
            result = listener(snapshot)
            if isinstance(result, Awaitable):
                await result
