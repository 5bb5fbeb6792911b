"""Shared utilities and helper functions for domain entities.

Pure utility functions with zero external dependencies.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime is timezone-aware with UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds from start to end, truncated; negative when end is earlier."""
    return int((end - start).total_seconds())
