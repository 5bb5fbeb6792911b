"""Mapping of record-catalog JSON payloads to Album entities.

The catalog returns albums in two shapes:
- master records (full data): artists list, year, styles, images, tracklist
- search results (summary data): a combined "Artist - Title" title string,
  ``style`` and ``cover_image``

Transport is not handled here; callers pass already-decoded dictionaries.
"""

from typing import Any

from src.config import get_logger
from src.domain.entities import Album, Track
from src.domain.errors import CatalogRecordError

logger = get_logger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_TITLE = "Unknown Title"


def separated_title(
    text: str,
    separator: str = "-",
    max_length: int | None = None,
) -> tuple[str, str]:
    """Split a search result's "Artist - Title" string on the first separator.

    Without a separator the whole text is the artist and the title is empty.
    """
    artist, found, title = text.partition(separator)
    if not found:
        return text.strip(), ""

    artist, title = artist.strip(), title.strip()
    if max_length is not None and len(title) > max_length:
        title = title[:max_length] + "..."
    return artist, title


def _album_id(payload: dict[str, Any]) -> int:
    raw_id = payload.get("id")
    try:
        return int(raw_id)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise CatalogRecordError(f"Catalog record has no usable id: {raw_id!r}") from e


def _string_list(values: Any) -> list[str]:
    if not values:
        return []
    return [str(value) for value in values if value is not None]


def _year(payload: dict[str, Any]) -> str:
    year = payload.get("year")
    return "" if year in (None, 0) else str(year)


def album_from_master(payload: dict[str, Any]) -> Album:
    """Build an Album from a full master record.

    Raises:
        CatalogRecordError: if the record is not a mapping or lacks an id
    """
    if not isinstance(payload, dict):
        raise CatalogRecordError(f"Expected a catalog record object, got {type(payload).__name__}")

    artists = payload.get("artists") or []
    artist = ""
    if artists and isinstance(artists[0], dict):
        artist = str(artists[0].get("name") or "")

    images = payload.get("images") or []
    cover = images[0].get("uri") if images and isinstance(images[0], dict) else None

    tracks = [
        Track(position=str(entry.get("position") or ""), title=str(entry.get("title") or ""))
        for entry in payload.get("tracklist") or []
        if isinstance(entry, dict)
    ]

    return Album(
        id=_album_id(payload),
        title=str(payload.get("title") or ""),
        artist=artist,
        release_year=_year(payload),
        styles=_string_list(payload.get("styles")),
        tracks=tracks,
        cover_image_url=cover,
    )


def album_from_search_result(payload: dict[str, Any]) -> Album:
    """Build an Album from a catalog search result.

    Raises:
        CatalogRecordError: if the record is not a mapping or lacks an id
    """
    if not isinstance(payload, dict):
        raise CatalogRecordError(f"Expected a catalog record object, got {type(payload).__name__}")

    artist, title = separated_title(str(payload.get("title") or ""))
    if not title:
        logger.debug(f"Search result {payload.get('id')} has no 'Artist - Title' separator")
    return Album(
        id=_album_id(payload),
        title=title or UNKNOWN_TITLE,
        artist=artist or UNKNOWN_ARTIST,
        release_year=_year(payload),
        styles=_string_list(payload.get("style")),
        cover_image_url=payload.get("cover_image"),
    )


def album_from_record(payload: dict[str, Any]) -> Album:
    """Build an Album from either record shape.

    Master records carry an ``artists`` list; anything else is treated as a
    search result.
    """
    if isinstance(payload, dict) and "artists" in payload:
        return album_from_master(payload)
    return album_from_search_result(payload)
