"""Cache store interface."""

from datetime import timedelta
from typing import Any, Protocol


class ICacheStore(Protocol):
    """Contract that data-access and page code depend on.

    Consumers only need a small key/value surface; CacheService
    satisfies it, and tests may substitute any object that does.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            default: Value returned when the key is missing or expired.

        Returns:
            The cached value, or ``default``.
        """
        ...

    def set(
        self,
        key: str,
        data: Any,
        ttl: int | timedelta | None = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            data: The value to store.
            ttl: Optional TTL in milliseconds or as a timedelta.
        """
        ...

    def has(self, key: str) -> bool:
        """Check if a live entry exists for key."""
        ...

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    def invalidate_pattern(self, pattern: str) -> int:
        """Delete keys matching a regular expression.

        Returns:
            Number of keys deleted.
        """
        ...
