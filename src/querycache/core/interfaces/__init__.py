"""Core interfaces (Protocol classes) for querycache."""

from querycache.core.interfaces.cache_store import ICacheStore
from querycache.core.interfaces.serializer import ISnapshotSerializer

__all__ = [
    "ICacheStore",
    "ISnapshotSerializer",
]
