"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta
from typing import cast


@dataclass
class CacheConfig:
    """Cache configuration.

    Capacity and default TTL are read once when a CacheService is
    built and never change afterwards. The cleanup interval is only
    consulted by CleanupTask, which the application owns.
    """

    max_size: int = 100
    default_ttl: timedelta | None = None
    cleanup_interval: timedelta | None = None

    def __post_init__(self) -> None:
        """Fill in default durations and validate limits."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(minutes=5)
        if self.cleanup_interval is None:
            self.cleanup_interval = timedelta(minutes=1)

        if self.max_size <= 0:
            raise ValueError(f"max_size must be positive, got {self.max_size}")
        # Compare whole milliseconds, the unit entries are stored in
        if self.default_ttl_ms <= 0:
            raise ValueError(f"default_ttl must be positive, got {self.default_ttl}")
        if self.cleanup_interval_ms <= 0:
            raise ValueError(
                f"cleanup_interval must be positive, got {self.cleanup_interval}"
            )

    @property
    def default_ttl_ms(self) -> int:
        """Default TTL in milliseconds."""
        return int(cast(timedelta, self.default_ttl).total_seconds() * 1000)

    @property
    def cleanup_interval_ms(self) -> int:
        """Cleanup interval in milliseconds."""
        return int(cast(timedelta, self.cleanup_interval).total_seconds() * 1000)
