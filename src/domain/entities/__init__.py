"""Core domain entities representing vinyl collection concepts."""

from .album import Album, Track
from .detection import DetectionEvent, ResolvedPlay
from .shared import elapsed_seconds, ensure_utc

__all__ = [
    # Collection entities
    "Album",
    "Track",
    # Listening entities
    "DetectionEvent",
    "ResolvedPlay",
    # Shared utilities
    "elapsed_seconds",
    "ensure_utc",
]
