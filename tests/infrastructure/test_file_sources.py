"""Tests for file-backed collection and detection sources."""

from datetime import UTC, datetime
import json

import pytest

from src.domain.errors import CatalogRecordError, DetectionRecordError
from src.infrastructure.connectors import (
    CollectionSource,
    DetectionLogFile,
    DetectionSource,
    JsonCollectionFile,
    detection_from_record,
    parse_timestamp,
)

RECORDS = [
    {"id": 1, "title": "The Beatles - Abbey Road", "style": ["Rock"]},
    {"id": 2, "title": "John Coltrane - Blue Train", "style": ["Hard Bop"]},
    {"id": 3, "title": "Kind of Blue", "artists": [{"name": "Miles Davis"}]},
]


@pytest.fixture
def collection_file(tmp_path):
    path = tmp_path / "collection.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    return path


@pytest.fixture
def detection_log(tmp_path):
    path = tmp_path / "detections.jsonl"
    lines = [
        {"title": "Come Together", "artist": "The Beatles", "album": "Abbey Road",
         "detected_at": "2024-12-02T20:00:00+00:00", "id": 1441164426},
        {"silence": True, "detected_at": 1733170500},
        {"title": "Blue Train", "artist": "John Coltrane", "detected_at": "2024-12-02T20:20:00"},
    ]
    path.write_text(
        "\n".join(json.dumps(line) for line in lines) + "\n\n", encoding="utf-8"
    )
    return path


class TestJsonCollectionFile:
    """Test collection export reading."""

    def test_read_all(self, collection_file):
        albums = JsonCollectionFile(collection_file).read_all()

        assert [album.id for album in albums] == [1, 2, 3]
        assert albums[0].artist == "The Beatles"
        assert albums[2].artist == "Miles Davis"

    @pytest.mark.asyncio
    async def test_pages(self, collection_file):
        source = JsonCollectionFile(collection_file, page_size=2)

        pages = [page async for page in source.collection_pages()]

        assert [len(page) for page in pages] == [2, 1]
        assert isinstance(source, CollectionSource)

    def test_explicit_pages(self, tmp_path):
        path = tmp_path / "paged.json"
        path.write_text(json.dumps({"pages": [RECORDS[:1], RECORDS[1:]]}), encoding="utf-8")

        assert len(JsonCollectionFile(path).read_all()) == 3

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogRecordError):
            JsonCollectionFile(path).read_all()

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "scalar.json"
        path.write_text("42", encoding="utf-8")

        with pytest.raises(CatalogRecordError):
            JsonCollectionFile(path).read_all()

    def test_page_size_validated(self, collection_file):
        with pytest.raises(ValueError):
            JsonCollectionFile(collection_file, page_size=0)


class TestParseTimestamp:
    """Test detection timestamp parsing."""

    def test_iso_with_offset(self):
        assert parse_timestamp("2024-12-02T21:00:00+01:00") == datetime(2024, 12, 2, 20, 0, tzinfo=UTC)

    def test_naive_iso_is_utc(self):
        assert parse_timestamp("2024-12-02T20:00:00").tzinfo is UTC

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["yesterday", True, None, [1]])
    def test_invalid(self, value):
        with pytest.raises(DetectionRecordError):
            parse_timestamp(value)


class TestDetectionFromRecord:
    """Test detection record mapping."""

    def test_song(self):
        event = detection_from_record(
            {"title": "So What", "artist": "Miles Davis", "detected_at": 60, "id": 12}
        )

        assert event.title == "So What"
        assert event.album is None
        assert event.external_id == "12"
        assert not event.is_silence

    def test_silence(self):
        assert detection_from_record({"silence": True, "detected_at": 60}).is_silence

    def test_missing_timestamp(self):
        with pytest.raises(DetectionRecordError):
            detection_from_record({"title": "So What"})


class TestDetectionLogFile:
    """Test JSON-lines detection replay."""

    def test_read_all_skips_blank_lines(self, detection_log):
        events = DetectionLogFile(detection_log).read_all()

        assert len(events) == 3
        assert events[0].album == "Abbey Road"
        assert events[1].is_silence
        assert events[2].detected_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_detections(self, detection_log):
        source = DetectionLogFile(detection_log)

        events = [event async for event in source.detections()]

        assert [event.title for event in events] == ["Come Together", "", "Blue Train"]
        assert isinstance(source, DetectionSource)

    def test_invalid_line(self, tmp_path):
        path = tmp_path / "broken.jsonl"
        path.write_text('{"title": "ok", "detected_at": 0}\n{oops\n', encoding="utf-8")

        with pytest.raises(DetectionRecordError, match=":2"):
            DetectionLogFile(path).read_all()
