"""Snapshot serializer interface."""

from typing import Any, Protocol


class ISnapshotSerializer(Protocol):
    """Contract for turning cache snapshots into text and back."""

    def dumps(self, snapshot: dict[str, Any]) -> str:
        """Serialize a snapshot mapping to text.

        Raises:
            SerializationError: If the snapshot cannot be serialized.
        """
        ...

    def loads(self, text: str) -> dict[str, Any]:
        """Parse text produced by ``dumps``.

        Raises:
            SerializationError: If the text cannot be parsed.
        """
        ...
