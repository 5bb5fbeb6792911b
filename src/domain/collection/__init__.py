"""Owned-album collection index."""

from .index import CollectionIndex

__all__ = ["CollectionIndex"]
