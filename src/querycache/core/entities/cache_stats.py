"""Cache statistics value object."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time statistics for a cache instance."""

    size: int
    max_size: int
    hit_rate: float
    total_hits: int
    total_misses: int

    @classmethod
    def from_counters(
        cls,
        size: int,
        max_size: int,
        hits: int,
        misses: int,
    ) -> "CacheStats":
        """Build stats from raw counters.

        The hit rate is 0.0 when no lookups have happened yet.
        """
        total = hits + misses
        return cls(
            size=size,
            max_size=max_size,
            hit_rate=hits / total if total > 0 else 0.0,
            total_hits=hits,
            total_misses=misses,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to a plain dictionary."""
        return asdict(self)
