"""JSON snapshot serializer implementation."""

import json
from datetime import date, datetime
from typing import Any

# Marker keys for tagged values. A cached one-key dict using either
# key verbatim is indistinguishable from a tagged value on load.
DATETIME_TAG = "__querycache_datetime__"
DATE_TAG = "__querycache_date__"


class SerializationError(Exception):
    """Raised when serialization or deserialization fails."""

    pass


class JsonSnapshotSerializer:
    """JSON serializer for cache snapshots.

    Output uses sorted keys so equal snapshots produce equal text.
    Dates and datetimes inside cached payloads are tagged on the way
    out and turned back into objects on the way in.
    """

    def __init__(self, indent: int | None = None) -> None:
        """Initialize the JSON serializer.

        Args:
            indent: Optional indentation for human-readable output.
        """
        self._indent = indent

    def dumps(self, snapshot: dict[str, Any]) -> str:
        """Serialize a snapshot to a JSON string.

        Args:
            snapshot: The snapshot mapping.

        Returns:
            The JSON text.

        Raises:
            SerializationError: If the snapshot cannot be serialized.
        """
        try:
            return json.dumps(
                snapshot,
                default=self._default_encoder,
                sort_keys=True,
                indent=self._indent,
            )
        except (RecursionError, TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize snapshot: {e}") from e

    def loads(self, text: str) -> dict[str, Any]:
        """Parse a JSON snapshot.

        Args:
            text: JSON text produced by ``dumps``.

        Returns:
            The snapshot mapping.

        Raises:
            SerializationError: If the text is not valid JSON, nests too
                deeply, or is not a JSON object.
        """
        try:
            result = json.loads(text, object_hook=self._object_hook)
        except (json.JSONDecodeError, RecursionError, TypeError, ValueError) as e:
            raise SerializationError(f"Failed to deserialize snapshot: {e}") from e

        if not isinstance(result, dict):
            raise SerializationError(
                f"Snapshot must be a JSON object, got {type(result).__name__}"
            )
        return result

    def _default_encoder(self, obj: Any) -> Any:
        """Custom encoder for non-JSON-serializable types.

        Args:
            obj: The object to encode.

        Returns:
            A JSON-serializable representation of the object.

        Raises:
            TypeError: If the object cannot be encoded.
        """
        if isinstance(obj, datetime):
            return {DATETIME_TAG: obj.isoformat()}
        if isinstance(obj, date):
            return {DATE_TAG: obj.isoformat()}
        if isinstance(obj, (set, frozenset)):
            return sorted(obj, key=repr)
        if hasattr(obj, "__dict__"):
            return obj.__dict__
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    def _object_hook(self, obj: dict[str, Any]) -> Any:
        if len(obj) == 1:
            if DATETIME_TAG in obj:
                return datetime.fromisoformat(obj[DATETIME_TAG])
            if DATE_TAG in obj:
                return date.fromisoformat(obj[DATE_TAG])
        return obj
