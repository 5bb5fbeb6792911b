"""spinstats domain layer - pure listening and matching logic."""

# Export all domain components
from . import collection, entities, listening, matching, statistics

# Re-export key types for convenience
from .collection import CollectionIndex
from .entities import Album, DetectionEvent, ResolvedPlay, Track
from .errors import (
    CatalogRecordError,
    DetectionRecordError,
    DuplicateIdError,
    SpinstatsError,
)
from .listening import LedgerSnapshot, ListeningLedger, ListeningSession
from .matching import DetectionResolver, NoCandidates, NotFound, Unresolved, score
from .statistics import InsufficientData, NoData, StatisticsSnapshot, compute_snapshot

__all__ = [
    # Modules
    "collection",
    "entities",
    "listening",
    "matching",
    "statistics",
    # Entities
    "Album",
    "DetectionEvent",
    "ResolvedPlay",
    "Track",
    # Errors
    "CatalogRecordError",
    "DetectionRecordError",
    "DuplicateIdError",
    "SpinstatsError",
    # Collection and matching
    "CollectionIndex",
    "DetectionResolver",
    "NoCandidates",
    "NotFound",
    "Unresolved",
    "score",
    # Listening
    "LedgerSnapshot",
    "ListeningLedger",
    "ListeningSession",
    # Statistics
    "InsufficientData",
    "NoData",
    "StatisticsSnapshot",
    "compute_snapshot",
]
