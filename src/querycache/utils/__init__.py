"""Utility helpers for querycache."""

from querycache.utils.clock import now_ms, to_millis
from querycache.utils.hashing import hash_value, make_key

__all__ = [
    "now_ms",
    "to_millis",
    "hash_value",
    "make_key",
]
