"""Cache entry entity."""

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """A stored value plus its expiry and access metadata.

    All timestamps are milliseconds since the epoch. Only ``touch``
    mutates an entry; overwriting a key replaces the entry entirely.
    """

    data: Any
    created_at: int
    ttl_ms: int
    access_count: int = 0
    last_accessed_at: int = 0

    @classmethod
    def create(cls, data: Any, ttl_ms: int, now: int) -> "CacheEntry":
        """Factory method to create a fresh entry.

        Args:
            data: The value to cache.
            ttl_ms: Time-to-live in milliseconds.
            now: Creation timestamp in milliseconds.

        Returns:
            A new CacheEntry with zeroed access metadata.
        """
        return cls(
            data=data,
            created_at=now,
            ttl_ms=ttl_ms,
            access_count=0,
            last_accessed_at=now,
        )

    def is_expired(self, now: int) -> bool:
        """Check whether the entry has outlived its TTL at ``now``."""
        return now - self.created_at > self.ttl_ms

    def touch(self, now: int) -> None:
        """Record a successful read."""
        self.access_count += 1
        self.last_accessed_at = now

    def to_dict(self) -> dict[str, Any]:
        """Convert the entry to its snapshot representation."""
        return {
            "data": self.data,
            "created_at": self.created_at,
            "ttl_ms": self.ttl_ms,
            "access_count": self.access_count,
            "last_accessed_at": self.last_accessed_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CacheEntry":
        """Rebuild an entry from its snapshot representation.

        Args:
            raw: Mapping produced by ``to_dict``.

        Returns:
            The reconstructed entry.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If ``raw`` is not a mapping or a field has the
                wrong type.
            ValueError: If a numeric field cannot be converted.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"Entry must be an object, got {type(raw).__name__}")

        created_at = int(raw["created_at"])
        return cls(
            data=raw["data"],
            created_at=created_at,
            ttl_ms=int(raw["ttl_ms"]),
            access_count=int(raw.get("access_count", 0)),
            last_accessed_at=int(raw.get("last_accessed_at", created_at)),
        )
