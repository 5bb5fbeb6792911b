"""Tests for CollectionLoader batch and incremental loading."""

import pytest

from src.application.services import CollectionLoader
from src.domain.entities import Album
from src.domain.errors import DuplicateIdError


class TestLoadBatch:
    """Test loading a complete collection at once."""

    def test_publishes_index(self, albums):
        loader = CollectionLoader()

        index = loader.load_batch(albums)

        assert loader.current is index
        assert len(index) == 3
        assert loader.loaded

    def test_duplicate_keeps_current_index(self, albums, abbey_road):
        loader = CollectionLoader()
        first = loader.load_batch(albums)

        with pytest.raises(DuplicateIdError):
            loader.load_batch([abbey_road, abbey_road])

        assert loader.current is first

    def test_index_options_forwarded(self, albums):
        loader = CollectionLoader(title_weight=0.5, artist_weight=0.5)
        assert loader.load_batch(albums).artist_weight == 0.5


class TestLoadPages:
    """Test incremental loading from an async page stream."""

    @pytest.mark.asyncio
    async def test_first_load_publishes_every_page(self, stream, abbey_road, blue_train, kind_of_blue):
        """Test readers see the collection grow page by page."""
        loader = CollectionLoader()
        sizes = []

        index = await loader.load_pages(
            stream([[abbey_road], [blue_train, kind_of_blue]]),
            on_update=lambda published: sizes.append(len(published)),
        )

        assert sizes == [0, 1, 3]
        assert loader.current is index
        assert not loader.loading

    @pytest.mark.asyncio
    async def test_refresh_publishes_once_complete(self, stream, albums, abbey_road):
        """Test a refresh never exposes a partial collection."""
        loader = CollectionLoader()
        loader.load_batch(albums)
        sizes = []

        await loader.load_pages(
            stream([[abbey_road]]),
            on_update=lambda published: sizes.append(len(published)),
        )

        assert sizes == [1]
        assert len(loader.current) == 1

    @pytest.mark.asyncio
    async def test_single_albums_accepted(self, stream, albums):
        loader = CollectionLoader()
        index = await loader.load_pages(stream(albums))
        assert len(index) == 3

    @pytest.mark.asyncio
    async def test_async_listener_awaited(self, stream, albums):
        loader = CollectionLoader()
        seen = []

        async def listener(published):
            seen.append(len(published))

        await loader.load_pages(stream([albums]), on_update=listener)

        assert seen == [0, 3]

    @pytest.mark.asyncio
    async def test_duplicate_across_pages(self, stream, abbey_road, blue_train):
        """Test a duplicate aborts the load, keeping pages already published."""
        loader = CollectionLoader()
        clash = Album(id=1, title="Let It Be", artist="The Beatles")

        with pytest.raises(DuplicateIdError):
            await loader.load_pages(stream([[abbey_road, blue_train], [clash]]))

        assert len(loader.current) == 2
        assert not loader.loading
        assert not loader.loaded


class TestLoad:
    """Test dispatch between batch and stream sources."""

    @pytest.mark.asyncio
    async def test_batch_source(self, albums):
        loader = CollectionLoader()
        updates = []

        index = await loader.load(albums, on_update=updates.append)

        assert len(index) == 3
        assert updates == [index]

    @pytest.mark.asyncio
    async def test_stream_source(self, stream, albums):
        loader = CollectionLoader()
        index = await loader.load(stream([albums]))
        assert len(index) == 3
