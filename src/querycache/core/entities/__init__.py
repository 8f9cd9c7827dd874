"""Domain entities for querycache."""

from querycache.core.entities.cache_config import CacheConfig
from querycache.core.entities.cache_entry import CacheEntry
from querycache.core.entities.cache_stats import CacheStats

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheStats",
]
