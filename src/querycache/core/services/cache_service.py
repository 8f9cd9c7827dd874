"""Cache service - the in-process cache engine."""

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from datetime import timedelta
from typing import Any

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.entities.cache_entry import CacheEntry
from querycache.core.entities.cache_stats import CacheStats
from querycache.core.interfaces.serializer import ISnapshotSerializer
from querycache.infrastructure.backends.memory import InMemoryCacheBackend
from querycache.infrastructure.serializers.json import (
    JsonSnapshotSerializer,
    SerializationError,
)
from querycache.utils.clock import now_ms, to_millis

logger = logging.getLogger(__name__)


class CacheService:
    """Bounded key/value cache with TTL expiry and LFU eviction.

    Entries expire ``ttl`` milliseconds after they are written. Expired
    entries are dropped lazily by ``get``/``has`` or eagerly by
    ``cleanup``. When a new key arrives at a full cache, the entry
    with the fewest reads is evicted, oldest access first on ties.

    The service holds no timers. Wire ``cleanup`` to a schedule with
    CleanupTask or similar from the application's startup code.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        backend: InMemoryCacheBackend | None = None,
        serializer: ISnapshotSerializer | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            config: Optional cache configuration. Uses defaults if not provided.
            backend: Optional entry store. Built from ``config.max_size``
                if not provided.
            serializer: Serializer used by ``serialize``/``deserialize``.
            clock: Callable returning the current time in milliseconds.
        """
        self._config = config or CacheConfig()
        self._backend = (
            backend
            if backend is not None
            else InMemoryCacheBackend(maxsize=self._config.max_size)
        )
        self._max_size = self._backend.maxsize
        self._default_ttl_ms = self._config.default_ttl_ms
        self._serializer = serializer or JsonSnapshotSerializer()
        self._clock = clock or now_ms

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def max_size(self) -> int:
        """Maximum number of entries."""
        return self._max_size

    @property
    def default_ttl_ms(self) -> int:
        """TTL applied when ``set`` is called without one."""
        return self._default_ttl_ms

    @property
    def size(self) -> int:
        """Current number of stored entries, including unswept expired ones."""
        return len(self._backend)

    def __len__(self) -> int:
        return len(self._backend)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a live value and record the access.

        Args:
            key: The cache key to retrieve.
            default: Value returned on a miss.

        Returns:
            The cached value, or ``default`` if missing or expired.
        """
        entry = self._backend.get(key)
        if entry is None:
            self._misses += 1
            return default

        now = self._clock()
        if entry.is_expired(now):
            del self._backend[key]
            self._misses += 1
            return default

        entry.touch(now)
        self._hits += 1
        return entry.data

    def set(
        self,
        key: str,
        data: Any,
        ttl: int | timedelta | None = None,
    ) -> None:
        """Store a value, replacing any existing entry for the key.

        Args:
            key: The cache key.
            data: The value to store.
            ttl: Optional TTL in milliseconds or as a timedelta.
                Uses the configured default if None.

        Raises:
            ValueError: If ``ttl`` is not positive.
        """
        ttl_ms = self._default_ttl_ms if ttl is None else to_millis(ttl)
        self._backend[key] = CacheEntry.create(data, ttl_ms, self._clock())

    def has(self, key: str) -> bool:
        """Check whether a live entry exists, without counting an access.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists and has not expired.
        """
        entry = self._backend.get(key)
        if entry is None:
            return False

        if entry.is_expired(self._clock()):
            del self._backend[key]
            return False

        return True

    def delete(self, key: str) -> bool:
        """Delete an entry whether or not it has expired.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            del self._backend[key]
            return True
        except KeyError:
            return False

    def clear(self) -> None:
        """Remove every entry and reset hit/miss counters."""
        self._backend.clear()
        self._hits = 0
        self._misses = 0

    def invalidate_pattern(self, pattern: str) -> int:
        """Delete keys containing a match for a regular expression.

        Args:
            pattern: Regular expression source, matched anywhere in the key.

        Returns:
            Number of keys deleted.

        Raises:
            re.error: If the pattern is not a valid regular expression.
        """
        regex = re.compile(pattern)
        keys_to_delete = [key for key in self._backend if regex.search(key)]

        for key in keys_to_delete:
            del self._backend[key]

        return len(keys_to_delete)

    def cleanup(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [
            key for key, entry in self._backend.items() if entry.is_expired(now)
        ]

        for key in expired:
            del self._backend[key]

        if expired:
            logger.debug("Cache cleanup: removed %d expired entries", len(expired))
        return len(expired)

    def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            A CacheStats snapshot computed from the current counters.
        """
        return CacheStats.from_counters(
            size=len(self._backend),
            max_size=self._max_size,
            hits=self._hits,
            misses=self._misses,
        )

    def keys(self) -> list[str]:
        """Return all stored keys, expired or not."""
        return list(self._backend)

    def serialize(self) -> str:
        """Dump the cache to a JSON snapshot.

        The snapshot holds every stored entry (expired ones included),
        the hit/miss counters and the time it was taken.

        Raises:
            SerializationError: If a cached payload cannot be encoded.
        """
        snapshot = {
            "entries": [
                [key, self._backend[key].to_dict()] for key in sorted(self._backend)
            ],
            "stats": {"hits": self._hits, "misses": self._misses},
            "timestamp": self._clock(),
        }
        return self._serializer.dumps(snapshot)

    def deserialize(self, blob: str) -> bool:
        """Restore the cache from a snapshot produced by ``serialize``.

        Restoring is best effort: if the snapshot cannot be parsed, a
        warning is logged and the current contents are left alone.
        Entries that expired while the snapshot was stored are skipped.

        Args:
            blob: The snapshot text.

        Returns:
            True if the snapshot was applied, False if it was rejected.
        """
        try:
            snapshot = self._serializer.loads(blob)
            entries = [
                (str(key), CacheEntry.from_dict(raw))
                for key, raw in snapshot.get("entries", [])
            ]
            stats = snapshot.get("stats") or {}
            hits = int(stats.get("hits", 0))
            misses = int(stats.get("misses", 0))
        except (
            SerializationError,
            AttributeError,
            KeyError,
            OverflowError,
            TypeError,
            ValueError,
        ) as e:
            logger.warning("Failed to deserialize cache snapshot: %s", e)
            return False

        now = self._clock()
        self._backend.clear()
        self._hits = hits
        self._misses = misses

        restored = 0
        for key, entry in entries:
            if not entry.is_expired(now):
                self._backend[key] = entry
                restored += 1

        logger.debug(
            "Restored %d of %d cache entries from snapshot", restored, len(entries)
        )
        return True

    def get_many(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Look up several keys, each counting as its own access.

        Args:
            keys: Keys to look up, in order.
            default: Value reported for misses.

        Returns:
            Mapping of each key to its value or ``default``.
        """
        return {key: self.get(key, default) for key in keys}

    def set_many(self, entries: Iterable[Sequence[Any]]) -> None:
        """Store several values in order.

        Later entries may evict earlier ones when the cache is full.

        Args:
            entries: ``(key, data)`` or ``(key, data, ttl)`` tuples.
        """
        for item in entries:
            key, data, *rest = item
            self.set(key, data, rest[0] if rest else None)
