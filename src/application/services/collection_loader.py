"""Collection loading service.

Consumes albums from a fetch collaborator, either as one complete batch or as
an async stream of pages (or single albums), and publishes successive
immutable CollectionIndex values. Readers pick up ``current`` whenever they
need it; a published index is never modified afterwards.
"""

from collections.abc import AsyncIterable, Awaitable, Callable, Iterable, Sequence
from typing import Any

from src.config import get_logger
from src.domain.collection.index import CollectionIndex
from src.domain.entities.album import Album
from src.domain.errors import DuplicateIdError

logger = get_logger(__name__)

IndexListener = Callable[[CollectionIndex], Awaitable[None] | None]
CollectionPages = AsyncIterable[Album | Sequence[Album]]


def _as_page(item: Album | Sequence[Album]) -> Sequence[Album]:
    return (item,) if isinstance(item, Album) else item


class CollectionLoader:
    """Builds and publishes the collection index.

    During the first load each page is published as soon as it is indexed,
    so detections can resolve against a partial collection. A refresh of an
    already loaded collection is staged and published once complete, so
    readers move straight from the old full index to the new full one.
    """

    def __init__(self, **index_options: Any) -> None:
        """Initialize with options forwarded to ``CollectionIndex.build``.

        Args:
            **index_options: scorer, title_weight, artist_weight, tie_epsilon
        """
        self._index_options = index_options
        self._current = CollectionIndex.empty(**index_options)
        self._loading = False
        self._loads_completed = 0

    @property
    def current(self) -> CollectionIndex:
        """Most recently published index."""
        return self._current

    @property
    def loading(self) -> bool:
        """Whether a load is in progress."""
        return self._loading

    @property
    def loaded(self) -> bool:
        """Whether at least one load has completed."""
        return self._loads_completed > 0

    def load_batch(self, albums: Iterable[Album]) -> CollectionIndex:
        """Replace the collection with a complete batch of albums.

        Raises:
            DuplicateIdError: if two albums share an id; the current index is kept
        """
        try:
            index = CollectionIndex.build(albums, **self._index_options)
        except DuplicateIdError as e:
            logger.error(f"Collection batch rejected: {e}", album_id=e.album_id)
            raise

        self._publish(index)
        self._loads_completed += 1
        logger.info(f"Collection loaded: {len(index)} albums")
        return index

    async def load_pages(
        self,
        pages: CollectionPages,
        on_update: IndexListener | None = None,
        publish_partial: bool | None = None,
    ) -> CollectionIndex:
        """Load the collection from an async stream of pages or albums.

        Args:
            pages: Async iterable yielding Album pages or single Albums
            on_update: Called with each newly published index
            publish_partial: Publish after every page. Defaults to True for
                the first load and False for a refresh.

        Returns:
            The complete index

        Raises:
            DuplicateIdError: if an album id repeats; pages published before
                the failure remain current
        """
        if publish_partial is None:
            publish_partial = not self.loaded

        staged = CollectionIndex.empty(**self._index_options)
        if publish_partial:
            await self._publish_and_notify(staged, on_update)

        self._loading = True
        page_count = 0
        try:
            async for item in pages:
                page = _as_page(item)
                staged = staged.with_albums(page)
                page_count += 1
                logger.debug(
                    f"Indexed collection page {page_count}: "
                    f"{len(page)} albums, {len(staged)} total"
                )
                if publish_partial:
                    await self._publish_and_notify(staged, on_update)
        except DuplicateIdError as e:
            logger.error(
                f"Collection load aborted on page {page_count + 1}: {e}",
                album_id=e.album_id,
            )
            raise
        finally:
            self._loading = False

        if not publish_partial:
            await self._publish_and_notify(staged, on_update)

        self._loads_completed += 1
        logger.info(f"Collection loaded: {len(staged)} albums in {page_count} pages")
        return staged

    async def load(
        self,
        source: Iterable[Album] | CollectionPages,
        on_update: IndexListener | None = None,
    ) -> CollectionIndex:
        """Load from either a complete batch or an async page stream."""
        if isinstance(source, AsyncIterable):
            return await self.load_pages(source, on_update)

        index = self.load_batch(source)
        if on_update is not None:
            result = on_update(index)
            if isinstance(result, Awaitable):
                await result
        return index

    def _publish(self, index: CollectionIndex) -> None:
        # Single reference assignment: readers see the old or the new index
        self._current = index

    async def _publish_and_notify(
        self,
        index: CollectionIndex,
        on_update: IndexListener | None,
    ) -> None:
        self._publish(index)
        if on_update is not None:
            result = on_update(index)
            if isinstance(result, Awaitable):
                await result
