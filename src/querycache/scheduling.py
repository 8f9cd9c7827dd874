"""Periodic cleanup of expired cache entries."""

import asyncio
import logging
from datetime import timedelta
from types import TracebackType

from querycache.core.services.cache_service import CacheService
from querycache.utils.clock import to_millis

logger = logging.getLogger(__name__)


class CleanupTask:
    """Background task calling ``cache.cleanup()`` on a fixed interval.

    The application owns the task: start it during startup and stop it
    during shutdown, e.g. from a FastAPI lifespan handler.

    Example:
        cleanup = CleanupTask(cache, interval=timedelta(minutes=1))

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            async with cleanup:
                yield
    """

    def __init__(
        self,
        cache: CacheService,
        interval: int | timedelta | None = None,
    ) -> None:
        """Initialize the task in a stopped state.

        Args:
            cache: The cache to sweep.
            interval: Time between sweeps, in milliseconds or as a
                timedelta. Defaults to the cache's configured interval.
        """
        self._cache = cache
        self._interval_ms = (
            cache.config.cleanup_interval_ms if interval is None else to_millis(interval)
        )
        self._task: asyncio.Task[None] | None = None

    @property
    def interval_ms(self) -> int:
        """Time between sweeps in milliseconds."""
        return self._interval_ms

    @property
    def running(self) -> bool:
        """Whether the background task is active."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            logger.warning("Cache cleanup task is already running")
            return

        self._task = asyncio.create_task(self._run())
        logger.info("Cache cleanup task started (every %d ms)", self._interval_ms)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return

        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        logger.info("Cache cleanup task stopped")

    async def __aenter__(self) -> "CleanupTask":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_ms / 1000)
            try:
                self._cache.cleanup()
            except Exception:
                logger.exception("Cache cleanup failed")
