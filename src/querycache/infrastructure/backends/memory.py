"""In-memory entry store with least-frequently-used eviction."""

import logging

from cachetools import Cache  # type: ignore[import-untyped]

from querycache.core.entities.cache_entry import CacheEntry

logger = logging.getLogger(__name__)


class InMemoryCacheBackend(Cache):
    """Bounded mapping of keys to CacheEntry objects.

    cachetools calls ``popitem`` only when a new key is inserted into
    a full store, so overriding it is enough to plug in the eviction
    policy: the entry with the fewest reads goes first, and among
    those the one read (or written) longest ago.

    Expiry is not handled here; CacheService decides what is stale.
    """

    def __init__(self, maxsize: int = 100) -> None:
        """Initialize the store.

        Args:
            maxsize: Maximum number of entries held at once.
        """
        super().__init__(maxsize=maxsize)

    def popitem(self) -> tuple[str, CacheEntry]:
        """Remove and return the least frequently used entry.

        Raises:
            KeyError: If the store is empty.
        """
        victim: str | None = None
        victim_rank: tuple[int, int] | None = None

        for key, entry in self.items():
            rank = (entry.access_count, entry.last_accessed_at)
            if victim_rank is None or rank < victim_rank:
                victim = key
                victim_rank = rank

        if victim is None:
            raise KeyError(f"{type(self).__name__} is empty")

        logger.debug(
            "Evicting %r (access_count=%d, last_accessed_at=%d)",
            victim,
            victim_rank[0] if victim_rank else 0,
            victim_rank[1] if victim_rank else 0,
        )
        return victim, self.pop(victim)

    def clear(self) -> None:
        """Remove every entry without going through eviction."""
        for key in list(self):
            del self[key]
