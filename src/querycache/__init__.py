"""querycache - in-process cache for backend query results.

A bounded key/value cache with per-entry TTL expiry, least-frequently-
used eviction, regex invalidation, JSON snapshots and memoizing
wrappers for sync and async producers.

Example:
    from datetime import timedelta

    from querycache import CacheConfig, CacheService, CleanupTask, with_cache

    cache = CacheService(CacheConfig(max_size=200, default_ttl=timedelta(minutes=10)))

    get_course = with_cache(
        cache,
        fetch_course,
        key=lambda course_id: f"course:{course_id}",
    )

    course = await get_course("algebra-101")   # fetched
    course = await get_course("algebra-101")   # served from cache

    cache.invalidate_pattern(r"^course:")

Periodic cleanup is owned by the application:
    async with CleanupTask(cache):
        ...
"""

from querycache.core.entities import CacheConfig, CacheEntry, CacheStats
from querycache.core.interfaces import ICacheStore, ISnapshotSerializer
from querycache.core.services import ApiCache, CacheService
from querycache.decorators import cached, invalidates, with_cache
from querycache.infrastructure import (
    InMemoryCacheBackend,
    JsonSnapshotSerializer,
    SerializationError,
)
from querycache.scheduling import CleanupTask

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "CacheStats",
    # Core interfaces
    "ICacheStore",
    "ISnapshotSerializer",
    # Core services
    "CacheService",
    "ApiCache",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "JsonSnapshotSerializer",
    "SerializationError",
    # Wrappers
    "with_cache",
    "cached",
    "invalidates",
    # Scheduling
    "CleanupTask",
]
