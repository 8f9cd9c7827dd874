"""Memoization and invalidation wrappers.

These wrap plain functions or coroutine functions so their results are
served from a CacheService. The cache is always passed in explicitly.

Concurrent misses for the same key are not coalesced: each caller runs
the producer and each result overwrites the entry when it completes.
"""

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable, Iterable
from datetime import timedelta
from typing import Any, TypeVar

from querycache.core.interfaces.cache_store import ICacheStore
from querycache.utils.hashing import make_key

F = TypeVar("F", bound=Callable[..., Any])

_MISSING = object()


def with_cache(
    cache: ICacheStore,
    producer: F,
    key: Callable[..., str] | None = None,
    ttl: int | timedelta | None = None,
) -> F:
    """Wrap ``producer`` so its results are memoized in ``cache``.

    Args:
        cache: The cache to read from and write to.
        producer: Function computing the value. May be a coroutine
            function or return an awaitable.
        key: Callable receiving the producer's arguments and returning
            the cache key. Defaults to a hash of the module, qualified
            name and arguments.
        ttl: Optional TTL for cached results.

    Returns:
        The wrapped callable. Coroutine functions stay awaitable.

    Example:
        get_course = with_cache(
            cache,
            fetch_course,
            key=lambda course_id: f"course:{course_id}",
            ttl=timedelta(minutes=10),
        )
    """

    def derive_key(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
        if key is not None:
            return key(*args, **kwargs)
        return make_key(producer, args, kwargs)

    if inspect.iscoroutinefunction(producer):

        @functools.wraps(producer)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = derive_key(args, kwargs)
            cached = cache.get(cache_key, _MISSING)
            if cached is not _MISSING:
                return cached

            result = await producer(*args, **kwargs)
            cache.set(cache_key, result, ttl)
            return result

        return async_wrapper  # type: ignore

    @functools.wraps(producer)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        cache_key = derive_key(args, kwargs)
        cached = cache.get(cache_key, _MISSING)
        if cached is not _MISSING:
            return cached

        result = producer(*args, **kwargs)

        if asyncio.isfuture(result):
            result.add_done_callback(
                functools.partial(_store_future_result, cache, cache_key, ttl)
            )
            return result

        if inspect.isawaitable(result):
            return _store_awaited(cache, cache_key, result, ttl)

        cache.set(cache_key, result, ttl)
        return result

    return wrapper  # type: ignore


def cached(
    cache: ICacheStore,
    key: Callable[..., str] | None = None,
    ttl: int | timedelta | None = None,
) -> Callable[[F], F]:
    """Decorator form of ``with_cache``.

    Example:
        @cached(cache, key=lambda user_id: f"enrollments:{user_id}")
        async def get_enrollments(user_id: str) -> list[dict]:
            return await db.fetch_enrollments(user_id)
    """

    def decorator(func: F) -> F:
        return with_cache(cache, func, key=key, ttl=ttl)

    return decorator


def invalidates(
    cache: ICacheStore,
    patterns: Iterable[str],
) -> Callable[[F], F]:
    """Decorator invalidating cache entries after a successful mutation.

    Args:
        cache: The cache to invalidate.
        patterns: Regular expressions passed to ``invalidate_pattern``.

    Returns:
        Decorator for sync or async functions. If the wrapped function
        raises, nothing is invalidated.

    Example:
        @invalidates(cache, patterns=[r"^api_courses", r"^course:"])
        async def update_course(course_id: str, data: dict) -> dict:
            return await db.update_course(course_id, data)
    """
    resolved = list(patterns)

    def invalidate() -> None:
        for pattern in resolved:
            cache.invalidate_pattern(pattern)

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                result = await func(*args, **kwargs)
                invalidate()
                return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = func(*args, **kwargs)
            invalidate()
            return result

        return wrapper  # type: ignore

    return decorator


def _store_future_result(
    cache: ICacheStore,
    cache_key: str,
    ttl: int | timedelta | None,
    future: "asyncio.Future[Any]",
) -> None:
    if future.cancelled():
        return
    # exception() marks a failure as retrieved, so asyncio will not warn
    # about it; the caller holding the returned future still sees it raise.
    if future.exception() is not None:
        return
    cache.set(cache_key, future.result(), ttl)


async def _store_awaited(
    cache: ICacheStore,
    cache_key: str,
    awaitable: Awaitable[Any],
    ttl: int | timedelta | None,
) -> Any:
    result = await awaitable
    cache.set(cache_key, result, ttl)
    return result
