"""Shared test fixtures - Pure domain objects with no external dependencies.

Every fixture is function-scoped so tests can never observe each other's
ledgers, sessions or indexes.
"""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from src.domain.collection.index import CollectionIndex
from src.domain.entities import Album, DetectionEvent, Track

BASE_TIME = datetime(2024, 12, 2, 20, 0, tzinfo=UTC)


async def _stream(items, pause: float = 0):
    for item in items:
        yield item
        await asyncio.sleep(pause)


@pytest.fixture
def stream():
    """Async iterator factory with a scheduling point after each item."""
    return _stream


@pytest.fixture
def at():
    """Timestamp factory: seconds after a fixed session start."""

    def _at(seconds: float) -> datetime:
        return BASE_TIME + timedelta(seconds=seconds)

    return _at


@pytest.fixture
def detection(at):
    """DetectionEvent factory keyed on seconds after session start."""

    def _detection(
        seconds: float,
        title: str,
        artist: str,
        album: str | None = None,
        external_id: str | None = None,
    ) -> DetectionEvent:
        return DetectionEvent(
            title=title,
            artist=artist,
            album=album,
            detected_at=at(seconds),
            external_id=external_id,
        )

    return _detection


@pytest.fixture
def abbey_road():
    """Album with a track list, for track resolution tests."""
    return Album(
        id=1,
        title="Abbey Road",
        artist="The Beatles",
        release_year="1969",
        styles=["Rock", "Pop Rock"],
        tracks=[
            Track(position="A1", title="Come Together"),
            Track(position="A2", title="Something"),
            Track(position="B1", title="Here Comes the Sun"),
        ],
    )


@pytest.fixture
def blue_train():
    return Album(id=2, title="Blue Train", artist="John Coltrane", styles=["Hard Bop"])


@pytest.fixture
def kind_of_blue():
    return Album(id=3, title="Kind of Blue", artist="Miles Davis", styles=["Modal", "Hard Bop"])


@pytest.fixture
def albums(abbey_road, blue_train, kind_of_blue):
    """Small collection of three albums by three artists."""
    return [abbey_road, blue_train, kind_of_blue]


@pytest.fixture
def index(albums):
    """Collection index over the standard albums."""
    return CollectionIndex.build(albums)
