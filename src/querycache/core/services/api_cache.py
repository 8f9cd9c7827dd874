"""Helpers for caching backend API calls."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta
from typing import Any, TypeVar

from querycache.core.interfaces.cache_store import ICacheStore
from querycache.utils.hashing import hash_value

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class ApiCache:
    """Cache-aside wrapper for data-access calls.

    Keys are namespaced with a prefix so that API results can be
    invalidated as a group without touching other cached values.
    """

    def __init__(
        self,
        cache: ICacheStore,
        default_ttl: int | timedelta | None = None,
        prefix: str = "api_",
    ) -> None:
        """Initialize the helper.

        Args:
            cache: The cache to store results in.
            default_ttl: TTL for API results. Falls back to the cache's
                own default if None.
            prefix: Prefix added to every endpoint key.
        """
        self._cache = cache
        self._default_ttl = default_ttl
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        """Prefix added to endpoint keys."""
        return self._prefix

    def key_for(self, endpoint: str) -> str:
        """Return the cache key used for an endpoint."""
        return f"{self._prefix}{endpoint}"

    async def cache_api_call(
        self,
        endpoint: str,
        fetcher: Callable[[], Awaitable[T]],
        ttl: int | timedelta | None = None,
    ) -> T:
        """Return the cached result for an endpoint, fetching it on a miss.

        Args:
            endpoint: Identifier of the backend query.
            fetcher: Zero-argument coroutine function performing the call.
            ttl: Optional TTL overriding the helper default.

        Returns:
            The cached or freshly fetched result.

        Raises:
            Exception: Whatever ``fetcher`` raises; nothing is cached.
        """
        key = self.key_for(endpoint)
        cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            logger.debug("Cache hit for %s", endpoint)
            return cached  # type: ignore[return-value]

        logger.debug("Cache miss for %s, fetching", endpoint)
        try:
            data = await fetcher()
        except Exception:
            logger.error("Error fetching %s", endpoint, exc_info=True)
            raise

        self._cache.set(key, data, ttl if ttl is not None else self._default_ttl)
        return data

    def invalidate(self, pattern: str) -> int:
        """Drop cached API results whose endpoint matches ``pattern``.

        Args:
            pattern: Regular expression applied after the prefix.

        Returns:
            Number of entries removed.
        """
        return self._cache.invalidate_pattern(f"{self._prefix}{pattern}")

    def cached_value(
        self,
        key: str,
        fetcher: Callable[[], T],
        dependencies: Sequence[Any] = (),
        ttl: int | timedelta | None = None,
    ) -> T:
        """Return a cached value that is recomputed when dependencies change.

        A companion ``<key>_deps`` entry records a hash of the
        dependencies the value was computed from. If it no longer
        matches, both entries are dropped before the lookup.

        Args:
            key: The cache key.
            fetcher: Zero-argument callable producing the value.
            dependencies: Values the cached result depends on.
            ttl: Optional TTL for both entries.

        Returns:
            The cached or freshly computed value.
        """
        deps_key = f"{key}_deps"
        current_deps = hash_value(list(dependencies))
        cached_deps = self._cache.get(deps_key)

        if cached_deps is not None and cached_deps != current_deps:
            self._cache.delete(key)
            self._cache.delete(deps_key)

        cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]

        result = fetcher()
        self._cache.set(key, result, ttl)
        self._cache.set(deps_key, current_deps, ttl)
        return result
