"""Tests for clock and hashing helpers."""

from datetime import timedelta

import pytest

from querycache.utils import hash_value, make_key, now_ms, to_millis


class TestToMillis:
    """Tests for to_millis."""

    def test_int_passthrough(self) -> None:
        """Test integers are taken as milliseconds."""
        assert to_millis(250) == 250

    def test_timedelta(self) -> None:
        """Test timedeltas are converted."""
        assert to_millis(timedelta(minutes=5)) == 300_000

    @pytest.mark.parametrize("ttl", [0, -1, timedelta(0)])
    def test_rejects_non_positive(self, ttl: int | timedelta) -> None:
        """Test non-positive TTLs are rejected."""
        with pytest.raises(ValueError):
            to_millis(ttl)


def test_now_ms_is_milliseconds() -> None:
    """Test the clock returns epoch milliseconds."""
    assert now_ms() > 1_600_000_000_000


class TestHashing:
    """Tests for hashing helpers."""

    def test_hash_value_deterministic(self) -> None:
        """Test key order does not change the hash."""
        assert hash_value({"a": 1, "b": 2}) == hash_value({"b": 2, "a": 1})
        assert len(hash_value({"a": 1})) == 16

    def test_hash_none(self) -> None:
        """Test None hashes to a fixed marker."""
        assert hash_value(None) == "none"

    def test_make_key(self) -> None:
        """Test keys include the function name and vary with arguments."""

        def load_course(course_id: str) -> None:
            return None

        key1 = make_key(load_course, ("1",), {})
        key2 = make_key(load_course, ("2",), {})

        assert "load_course" in key1
        assert key1 != key2
        assert key1 == make_key(load_course, ("1",), {})
