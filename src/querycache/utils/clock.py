"""Millisecond clock and TTL conversion helpers."""

import time
from datetime import timedelta


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def to_millis(ttl: int | timedelta) -> int:
    """Convert a TTL to whole milliseconds.

    Args:
        ttl: Either a number of milliseconds or a timedelta.

    Returns:
        The TTL in milliseconds.

    Raises:
        ValueError: If the TTL is not positive.
    """
    if isinstance(ttl, timedelta):
        millis = int(ttl.total_seconds() * 1000)
    else:
        millis = int(ttl)

    if millis <= 0:
        raise ValueError(f"TTL must be positive, got {ttl!r}")
    return millis
