"""File-backed collection and detection sources.

Used to replay a recorded session from disk:
- a collection export: a JSON list of catalog records, or
  ``{"pages": [[record, ...], ...]}`` to keep the original pagination
- a detection log: JSON lines, one detection per line::

    {"title": "Come Together", "artist": "The Beatles", "album": "Abbey Road",
     "detected_at": "2024-12-02T20:15:00+00:00", "id": "1441164426"}
    {"silence": true, "detected_at": 1733170500}

Pages are yielded with a scheduling point in between, so a detection consumer
running on the same loop interleaves with the load.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Any

from toolz import partition_all

from src.config import get_logger, resilient_operation
from src.domain.entities import Album, DetectionEvent
from src.domain.errors import CatalogRecordError, DetectionRecordError

from .catalog import album_from_record

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50


class JsonCollectionFile:
    """Collection source reading a JSON collection export."""

    def __init__(self, path: Path, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.path = Path(path)
        self.page_size = page_size

    def _record_pages(self) -> list[list[dict[str, Any]]]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise CatalogRecordError(f"{self.path} is not valid JSON: {e}") from e

        if isinstance(data, dict) and "pages" in data:
            return [list(page) for page in data["pages"]]
        if isinstance(data, list):
            return [list(page) for page in partition_all(self.page_size, data)]
        raise CatalogRecordError(
            f"{self.path} must hold a list of records or an object with 'pages'"
        )

    def read_all(self) -> list[Album]:
        """Every album in the export as one batch."""
        return [album_from_record(record) for page in self._record_pages() for record in page]

    async def collection_pages(self) -> AsyncIterator[Sequence[Album]]:
        """Yield albums page by page."""
        pages = self._record_pages()
        logger.debug(f"Reading {len(pages)} collection pages from {self.path}")
        for page in pages:
            yield [album_from_record(record) for record in page]
            await asyncio.sleep(0)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string or epoch seconds into a UTC datetime.

    Raises:
        DetectionRecordError: for anything else
    """
    if isinstance(value, bool):
        raise DetectionRecordError(f"Invalid detection timestamp: {value!r}")
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value, tz=UTC)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise DetectionRecordError(f"Invalid detection timestamp: {value!r}") from e
        return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed
    raise DetectionRecordError(f"Invalid detection timestamp: {value!r}")


def detection_from_record(record: dict[str, Any]) -> DetectionEvent:
    """Build a DetectionEvent from one decoded log line.

    Raises:
        DetectionRecordError: if the record is not an object or lacks a timestamp
    """
    if not isinstance(record, dict):
        raise DetectionRecordError(f"Expected a detection object, got {type(record).__name__}")
    if "detected_at" not in record:
        raise DetectionRecordError("Detection record has no 'detected_at'")

    detected_at = parse_timestamp(record["detected_at"])
    if record.get("silence"):
        return DetectionEvent.silence(detected_at)

    return DetectionEvent(
        title=str(record.get("title") or ""),
        artist=str(record.get("artist") or ""),
        album=record.get("album") or None,
        detected_at=detected_at,
        external_id=str(record["id"]) if record.get("id") is not None else None,
    )


class DetectionLogFile:
    """Detection source replaying a JSON-lines detection log."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read_all(self) -> list[DetectionEvent]:
        """Every detection in the log, in file order."""
        events = []
        with self.path.open(encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise DetectionRecordError(
                        f"{self.path}:{line_number} is not valid JSON: {e}"
                    ) from e
                events.append(detection_from_record(record))
        return events

    @resilient_operation("detection_log_replay")
    async def _load(self) -> list[DetectionEvent]:
        return self.read_all()

    async def detections(self) -> AsyncIterator[DetectionEvent]:
        """Yield detections in file order."""
        events = await self._load()
        logger.debug(f"Replaying {len(events)} detections from {self.path}")
        for event in events:
            yield event
            await asyncio.sleep(0)
