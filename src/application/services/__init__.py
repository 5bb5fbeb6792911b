"""Application services - orchestration of collection loading and listening sessions."""

from .collection_loader import CollectionLoader, CollectionPages
from .listening_service import ListeningService, StatisticsListener

__all__ = [
    "CollectionLoader",
    "CollectionPages",
    "ListeningService",
    "StatisticsListener",
]
