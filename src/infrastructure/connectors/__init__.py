"""Connectors turning external records into domain entities."""

from .catalog import (
    album_from_master,
    album_from_record,
    album_from_search_result,
    separated_title,
)
from .files import DetectionLogFile, JsonCollectionFile, detection_from_record, parse_timestamp
from .protocols import CollectionSource, DetectionSource

__all__ = [
    "CollectionSource",
    "DetectionLogFile",
    "DetectionSource",
    "JsonCollectionFile",
    "album_from_master",
    "album_from_record",
    "album_from_search_result",
    "detection_from_record",
    "parse_timestamp",
    "separated_title",
]
