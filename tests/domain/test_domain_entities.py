"""Tests for domain entities."""

from datetime import UTC, datetime

import attrs
import pytest

from src.domain.entities import Album, DetectionEvent, ResolvedPlay, Track, elapsed_seconds


class TestAlbum:
    """Test album entity behavior."""

    def test_lists_stored_as_tuples(self):
        album = Album(id=1, title="T", artist="A", styles=["Jazz"], tracks=[Track("A1", "x")])

        assert album.styles == ("Jazz",)
        assert isinstance(album.tracks, tuple)
        assert album.has_tracklist

    def test_immutable(self, abbey_road):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            abbey_road.title = "Let It Be"

    def test_id_must_be_int(self):
        with pytest.raises(TypeError):
            Album(id="1", title="T", artist="A")

    def test_with_tracks(self, blue_train):
        updated = blue_train.with_tracks([Track("A1", "Blue Train")])

        assert updated.has_tracklist
        assert not blue_train.has_tracklist

    def test_display_title(self):
        album = Album(id=1, title="x" * 40, artist="A")
        assert album.display_title() == "x" * 32 + "..."
        assert album.display_title(max_length=50) == "x" * 40


class TestDetectionEvent:
    """Test detection event behavior."""

    def test_naive_timestamp_made_utc(self):
        event = DetectionEvent(title="t", artist="a", detected_at=datetime(2024, 1, 1))
        assert event.detected_at.tzinfo is UTC

    def test_silence(self, at):
        silence = DetectionEvent.silence(at(0))

        assert silence.is_silence
        assert not DetectionEvent(title="t", artist="", detected_at=at(0)).is_silence

    def test_album_text_prefers_hint(self, detection):
        assert detection(0, "Something", "The Beatles", album="Abbey Road").album_text == "Abbey Road"
        assert detection(0, "Something", "The Beatles").album_text == "Something"

    def test_identity(self, detection):
        assert detection(0, "Song", "Artist").identity == detection(5, "SONG", "artist").identity
        assert detection(0, "Song", "Artist", external_id="9").identity == "9"


class TestResolvedPlay:
    """Test resolved play validation."""

    def test_confidence_range(self):
        with pytest.raises(ValueError):
            ResolvedPlay(album_id=1, confidence=1.5)


def test_elapsed_seconds_truncates(at):
    assert elapsed_seconds(at(0), at(29.9)) == 29
    assert elapsed_seconds(at(10), at(0)) == -10
