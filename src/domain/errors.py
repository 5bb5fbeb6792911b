"""Domain exceptions.

Only genuine faults are exceptions. Expected outcomes such as an unknown id,
an unmatched detection or too little listening time are result values (see
``src.domain.matching.types`` and ``src.domain.statistics.types``).
"""


class SpinstatsError(Exception):
    """Base class for spinstats errors."""


class DuplicateIdError(SpinstatsError):
    """Two albums with the same catalog id were given to one collection index."""

    def __init__(self, album_id: int) -> None:
        self.album_id = album_id
        super().__init__(f"Duplicate album id in collection: {album_id}")


class CatalogRecordError(SpinstatsError):
    """A catalog record could not be turned into an Album."""


class DetectionRecordError(SpinstatsError):
    """A recorded detection could not be turned into a DetectionEvent."""
