"""Collaborator protocol definitions.

The listening engine only consumes records; fetching them is somebody else's
job. These protocols describe the two inputs so sources can be swapped
(backend fetch, file replay, test doubles) without changing the services.

Key components:
- CollectionSource: produces owned albums, as a batch or as async pages
- DetectionSource: produces detection events in arrival order
"""

from collections.abc import AsyncIterator, Sequence
from typing import Protocol, runtime_checkable

from src.domain.entities import Album, DetectionEvent


@runtime_checkable
class CollectionSource(Protocol):
    """Protocol for collection fetch collaborators."""

    def collection_pages(self) -> AsyncIterator[Sequence[Album]]:
        """Yield the user's albums page by page.

        The total count need not be known in advance.
        """
        ...


@runtime_checkable
class DetectionSource(Protocol):
    """Protocol for audio recognition collaborators."""

    def detections(self) -> AsyncIterator[DetectionEvent]:
        """Yield detection events in arrival order, silence included."""
        ...
