"""Domain services for querycache."""

from querycache.core.services.api_cache import ApiCache
from querycache.core.services.cache_service import CacheService

__all__ = [
    "ApiCache",
    "CacheService",
]
