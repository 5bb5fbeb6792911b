"""Tests for mapping catalog payloads to Album entities."""

import pytest

from src.domain.entities import Track
from src.domain.errors import CatalogRecordError
from src.infrastructure.connectors import (
    album_from_master,
    album_from_record,
    album_from_search_result,
    separated_title,
)


@pytest.fixture
def master_payload():
    return {
        "id": 24047,
        "title": "Abbey Road",
        "year": 1969,
        "artists": [{"name": "The Beatles", "id": 82730}],
        "styles": ["Pop Rock", "Psychedelic Rock"],
        "images": [{"uri": "https://img.example/abbey.jpg", "type": "primary"}],
        "tracklist": [
            {"position": "A1", "title": "Come Together", "duration": "4:20"},
            {"position": "B1", "title": "Here Comes The Sun", "duration": "3:05"},
        ],
    }


@pytest.fixture
def search_payload():
    return {
        "id": 2345,
        "title": "Miles Davis - Kind Of Blue",
        "year": "1959",
        "style": ["Modal", "Cool Jazz"],
        "cover_image": "https://img.example/kob.jpg",
    }


class TestSeparatedTitle:
    """Test splitting combined "Artist - Title" strings."""

    def test_split_on_first_separator(self):
        assert separated_title("Crosby, Stills & Nash - Déjà Vu - Remaster") == (
            "Crosby, Stills & Nash",
            "Déjà Vu - Remaster",
        )

    def test_without_separator(self):
        assert separated_title("Untitled") == ("Untitled", "")

    def test_title_shortened(self):
        assert separated_title("A - Very Long Title", max_length=4) == ("A", "Very...")


class TestAlbumFromMaster:
    """Test full master record mapping."""

    def test_full_record(self, master_payload):
        album = album_from_master(master_payload)

        assert album.id == 24047
        assert album.title == "Abbey Road"
        assert album.artist == "The Beatles"
        assert album.release_year == "1969"
        assert album.styles == ("Pop Rock", "Psychedelic Rock")
        assert album.cover_image_url == "https://img.example/abbey.jpg"
        assert album.tracks == (
            Track("A1", "Come Together"),
            Track("B1", "Here Comes The Sun"),
        )

    def test_sparse_record(self):
        album = album_from_master({"id": "7", "title": "Demo", "artists": []})

        assert album.id == 7
        assert album.artist == ""
        assert album.styles == ()
        assert album.cover_image_url is None
        assert not album.has_tracklist

    def test_missing_id(self, master_payload):
        del master_payload["id"]
        with pytest.raises(CatalogRecordError):
            album_from_master(master_payload)


class TestAlbumFromSearchResult:
    """Test summary search result mapping."""

    def test_full_record(self, search_payload):
        album = album_from_search_result(search_payload)

        assert album.id == 2345
        assert album.artist == "Miles Davis"
        assert album.title == "Kind Of Blue"
        assert album.release_year == "1959"
        assert album.styles == ("Modal", "Cool Jazz")
        assert album.tracks is None

    def test_missing_title_defaults(self):
        album = album_from_search_result({"id": 1})

        assert album.artist == "Unknown Artist"
        assert album.title == "Unknown Title"

    def test_not_a_mapping(self):
        with pytest.raises(CatalogRecordError):
            album_from_search_result(["not", "a", "record"])


class TestAlbumFromRecord:
    """Test shape dispatch."""

    def test_dispatch(self, master_payload, search_payload):
        assert album_from_record(master_payload).artist == "The Beatles"
        assert album_from_record(search_payload).artist == "Miles Davis"
