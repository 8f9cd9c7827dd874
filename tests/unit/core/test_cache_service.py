"""Tests for CacheService."""

from datetime import timedelta

import pytest

from querycache import CacheConfig, CacheService, InMemoryCacheBackend
from tests.conftest import FakeClock


class TestGetSet:
    """Tests for basic reads and writes."""

    def test_set_and_get(self, cache: CacheService) -> None:
        """Test basic set and get operations."""
        cache.set("course:1", {"title": "Algebra"})

        assert cache.get("course:1") == {"title": "Algebra"}

    def test_get_missing_key(self, cache: CacheService) -> None:
        """Test getting a missing key returns the default."""
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_cached_none_is_a_hit(self, cache: CacheService) -> None:
        """Test that a stored None is distinguishable via default."""
        sentinel = object()
        cache.set("nothing", None)

        assert cache.get("nothing", sentinel) is None
        assert cache.get_stats().total_hits == 1

    def test_get_expired(self, cache: CacheService, clock: FakeClock) -> None:
        """Test that an entry is gone once its TTL has passed."""
        cache.set("k", "v", 100)
        clock.advance(150)

        assert cache.get("k") is None
        assert cache.size == 0
        assert cache.get_stats().total_misses == 1

    def test_get_at_ttl_boundary(self, cache: CacheService, clock: FakeClock) -> None:
        """Test that an entry is still live exactly at its TTL."""
        cache.set("k", "v", 100)
        clock.advance(100)

        assert cache.get("k") == "v"

    def test_default_ttl(self, clock: FakeClock) -> None:
        """Test that set without TTL uses the configured default."""
        cache = CacheService(
            CacheConfig(default_ttl=timedelta(seconds=1)),
            clock=clock,
        )
        cache.set("k", "v")

        clock.advance(1000)
        assert cache.has("k")
        clock.advance(1)
        assert not cache.has("k")

    def test_timedelta_ttl(self, cache: CacheService, clock: FakeClock) -> None:
        """Test that TTL can be given as a timedelta."""
        cache.set("k", "v", timedelta(seconds=2))

        clock.advance(2001)
        assert cache.get("k") is None

    def test_non_positive_ttl_rejected(self, cache: CacheService) -> None:
        """Test that a zero TTL is a usage error."""
        with pytest.raises(ValueError):
            cache.set("k", "v", 0)

    def test_per_entry_ttl(self, cache: CacheService, clock: FakeClock) -> None:
        """Test that entries in one cache keep their own TTLs."""
        cache.set("short", 1, 50)
        cache.set("long", 2, 500)
        clock.advance(100)

        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_overwrite_resets_metadata(
        self, cache: CacheService, clock: FakeClock
    ) -> None:
        """Test that set on an existing key creates a fresh entry."""
        cache.set("k", "old", 100)
        clock.advance(10)
        cache.get("k")
        cache.get("k")
        clock.advance(80)

        cache.set("k", "new", 100)
        entry = cache._backend["k"]

        assert entry.data == "new"
        assert entry.access_count == 0
        assert entry.created_at == clock.now
        assert entry.last_accessed_at == clock.now

        # The fresh entry's TTL counts from the overwrite
        clock.advance(50)
        assert cache.get("k") == "new"

    def test_get_updates_access_metadata(
        self, cache: CacheService, clock: FakeClock
    ) -> None:
        """Test that get bumps access count and last access time."""
        cache.set("k", "v")
        clock.advance(25)
        cache.get("k")

        entry = cache._backend["k"]
        assert entry.access_count == 1
        assert entry.last_accessed_at == clock.now


class TestHasDelete:
    """Tests for has, delete and clear."""

    def test_has(self, cache: CacheService) -> None:
        """Test checking if key exists."""
        cache.set("k", "v")

        assert cache.has("k") is True
        assert cache.has("missing") is False
        assert "k" in cache

    def test_has_does_not_touch_stats(self, cache: CacheService) -> None:
        """Test has leaves counters and access metadata alone."""
        cache.set("k", "v")
        cache.has("k")
        cache.has("missing")

        stats = cache.get_stats()
        assert stats.total_hits == 0
        assert stats.total_misses == 0
        assert cache._backend["k"].access_count == 0

    def test_has_expired_removes_entry(
        self, cache: CacheService, clock: FakeClock
    ) -> None:
        """Test has lazily deletes an expired entry."""
        cache.set("k", "v", 10)
        clock.advance(11)

        assert cache.has("k") is False
        assert cache.keys() == []

    def test_delete(self, cache: CacheService) -> None:
        """Test deleting a key."""
        cache.set("k", "v")

        assert cache.delete("k") is True
        assert cache.get("k") is None
        assert cache.delete("k") is False

    def test_delete_expired_entry(self, cache: CacheService, clock: FakeClock) -> None:
        """Test delete reports presence even for stale entries."""
        cache.set("k", "v", 10)
        clock.advance(20)

        assert cache.delete("k") is True

    def test_clear(self, cache: CacheService) -> None:
        """Test clearing entries and counters."""
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.get("missing")

        cache.clear()

        stats = cache.get_stats()
        assert len(cache) == 0
        assert stats.total_hits == 0
        assert stats.total_misses == 0
        assert stats.max_size == 3


class TestEviction:
    """Tests for least-frequently-used eviction."""

    def test_capacity_bound(self, cache: CacheService, clock: FakeClock) -> None:
        """Test size never exceeds max_size for distinct keys."""
        for i in range(10):
            clock.advance(1)
            cache.set(f"k{i}", i)
            assert cache.size <= cache.max_size

        assert cache.size == 3

    def test_evicts_oldest_unread_entry(self, clock: FakeClock) -> None:
        """With equal access counts the least recently touched goes."""
        cache = CacheService(CacheConfig(max_size=2), clock=clock)
        cache.set("a", 1)
        clock.advance(1)
        cache.set("b", 2)
        clock.advance(1)
        cache.set("c", 3)

        assert sorted(cache.keys()) == ["b", "c"]

    def test_evicts_least_frequently_used(self, clock: FakeClock) -> None:
        """Test that frequently read entries survive eviction."""
        cache = CacheService(CacheConfig(max_size=2), clock=clock)
        cache.set("a", 1)
        clock.advance(1)
        cache.set("b", 2)
        clock.advance(1)
        cache.get("a")
        clock.advance(1)
        cache.set("c", 3)

        assert sorted(cache.keys()) == ["a", "c"]

    def test_recency_tie_break(self, clock: FakeClock) -> None:
        """Among equally read entries the one read longest ago goes."""
        cache = CacheService(CacheConfig(max_size=2), clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        clock.advance(5)
        cache.get("b")
        clock.advance(5)
        cache.get("a")
        clock.advance(1)
        cache.set("c", 3)

        assert sorted(cache.keys()) == ["a", "c"]

    def test_single_slot(self, clock: FakeClock) -> None:
        """Test a one-entry cache always keeps the newest key."""
        cache = CacheService(CacheConfig(max_size=1), clock=clock)
        cache.set("a", 1)
        cache.get("a")
        clock.advance(1)
        cache.set("b", 2)

        assert cache.keys() == ["b"]

    def test_overwrite_does_not_evict(self, cache: CacheService) -> None:
        """Test replacing an existing key in a full cache keeps the others."""
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.set("a", 10)

        assert sorted(cache.keys()) == ["a", "b", "c"]
        assert cache.get("a") == 10

    def test_custom_backend(self, clock: FakeClock) -> None:
        """Test that an injected backend defines the capacity."""
        cache = CacheService(backend=InMemoryCacheBackend(maxsize=2), clock=clock)

        assert cache.max_size == 2


class TestStats:
    """Tests for statistics reporting."""

    def test_fresh_cache_stats(self, cache: CacheService) -> None:
        """Test a fresh cache reports a zero hit rate."""
        stats = cache.get_stats()

        assert stats.size == 0
        assert stats.max_size == 3
        assert stats.hit_rate == 0.0

    def test_hit_rate(self, cache: CacheService, clock: FakeClock) -> None:
        """Test hits and misses, including expired reads."""
        cache.set("k", "v", 10)
        cache.get("k")
        cache.get("k")
        cache.get("missing")
        clock.advance(11)
        cache.get("k")

        stats = cache.get_stats()
        assert stats.total_hits == 2
        assert stats.total_misses == 2
        assert stats.hit_rate == 0.5

    def test_keys_include_expired(self, cache: CacheService, clock: FakeClock) -> None:
        """Test keys reports stored keys without expiry filtering."""
        cache.set("a", 1, 10)
        cache.set("b", 2)
        clock.advance(20)

        keys = cache.keys()
        assert sorted(keys) == ["a", "b"]

        # The returned list is a snapshot
        keys.clear()
        assert len(cache.keys()) == 2


class TestBatchOperations:
    """Tests for get_many and set_many."""

    def test_get_many(self, cache: CacheService) -> None:
        """Test each key is looked up and counted independently."""
        cache.set("a", 1)
        cache.set("b", 2)

        result = cache.get_many(["b", "missing", "a"])

        assert result == {"b": 2, "missing": None, "a": 1}
        assert list(result) == ["b", "missing", "a"]
        stats = cache.get_stats()
        assert stats.total_hits == 2
        assert stats.total_misses == 1

    def test_set_many(self, cache: CacheService, clock: FakeClock) -> None:
        """Test tuples with and without TTL."""
        cache.set_many([("a", 1), ("b", 2, 10), ("c", 3, None)])
        clock.advance(11)

        assert cache.get("a") == 1
        assert cache.get("b") is None
        assert cache.get("c") == 3

    def test_set_many_evicts_within_batch(self, clock: FakeClock) -> None:
        """Test later entries may evict earlier ones from the same batch."""
        cache = CacheService(CacheConfig(max_size=2), clock=clock)

        cache.set_many([("a", 1), ("b", 2), ("c", 3)])

        assert cache.size == 2
        assert "c" in cache
