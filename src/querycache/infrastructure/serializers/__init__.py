"""Snapshot serializer implementations."""

from querycache.infrastructure.serializers.json import (
    JsonSnapshotSerializer,
    SerializationError,
)

__all__ = ["JsonSnapshotSerializer", "SerializationError"]
