"""Hashing utilities for cache key generation."""

import hashlib
import json
from collections.abc import Callable
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def make_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> str:
    """Build a default cache key for a function call.

    Args:
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.

    Returns:
        A key of the form ``module.qualname:<hash of arguments>``.
    """
    module = getattr(func, "__module__", None) or "default"
    name = getattr(func, "__qualname__", None) or type(func).__name__
    return f"{module}.{name}:{hash_value({'args': list(args), 'kwargs': kwargs})}"
