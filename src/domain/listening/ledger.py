"""Per-album listening time accumulator.

The ledger is the only mutable structure on the listening side. Every
operation takes the same lock, so a snapshot reflects either all or none of
any concurrent ``record_play`` and a reset is a barrier: nothing recorded
before it survives and nothing after it is lost.
"""

from collections.abc import Iterator, Mapping
import threading
from types import MappingProxyType

from attrs import define, field


@define(frozen=True, slots=True)
class LedgerSnapshot:
    """Immutable point-in-time copy of the ledger."""

    seconds_by_album: Mapping[int, int] = field(
        factory=lambda: MappingProxyType({}),
        converter=lambda m: MappingProxyType(dict(m)),
    )

    @property
    def total_seconds(self) -> int:
        """Listening time across every entry, known to the collection or not."""
        return sum(self.seconds_by_album.values())

    def __getitem__(self, album_id: int) -> int:
        return self.seconds_by_album[album_id]

    def __contains__(self, album_id: object) -> bool:
        return album_id in self.seconds_by_album

    def __iter__(self) -> Iterator[int]:
        return iter(self.seconds_by_album)

    def __len__(self) -> int:
        return len(self.seconds_by_album)

    def get(self, album_id: int, default: int = 0) -> int:
        """Seconds for an album, or default when it has no entry."""
        return self.seconds_by_album.get(album_id, default)

    def items(self):
        """(album_id, seconds) pairs in ascending album id order."""
        return sorted(self.seconds_by_album.items())


class ListeningLedger:
    """Thread-safe mapping from album id to accumulated listened seconds."""

    def __init__(self) -> None:
        self._seconds: dict[int, int] = {}
        self._lock = threading.Lock()

    def record_play(self, album_id: int, seconds: int) -> None:
        """Add listened seconds to an album, creating its entry at zero.

        Raises:
            ValueError: if seconds is negative or not an integer
        """
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise ValueError(f"seconds must be an integer, got {seconds!r}")
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")

        with self._lock:
            self._seconds[album_id] = self._seconds.get(album_id, 0) + seconds

    def snapshot(self) -> LedgerSnapshot:
        """Immutable copy of the current totals."""
        with self._lock:
            return LedgerSnapshot(self._seconds)

    def reset(self) -> None:
        """Clear every accumulated total."""
        with self._lock:
            self._seconds.clear()

    def total_seconds(self) -> int:
        """Sum of all accumulated seconds."""
        with self._lock:
            return sum(self._seconds.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._seconds)
