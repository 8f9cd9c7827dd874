"""Infrastructure layer implementations for querycache."""

from querycache.infrastructure.backends import InMemoryCacheBackend
from querycache.infrastructure.serializers import (
    JsonSnapshotSerializer,
    SerializationError,
)

__all__ = [
    "InMemoryCacheBackend",
    "JsonSnapshotSerializer",
    "SerializationError",
]
