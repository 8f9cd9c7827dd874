"""Core domain layer for querycache."""

from querycache.core.entities import CacheConfig, CacheEntry, CacheStats
from querycache.core.interfaces import ICacheStore, ISnapshotSerializer
from querycache.core.services import ApiCache, CacheService

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheStats",
    # Interfaces
    "ICacheStore",
    "ISnapshotSerializer",
    # Services
    "ApiCache",
    "CacheService",
]
