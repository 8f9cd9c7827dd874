"""Pytest configuration for querycache tests."""

import pytest

from querycache import CacheConfig, CacheService


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for testing."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheService:
    """Create a small cache driven by the fake clock."""
    return CacheService(CacheConfig(max_size=3), clock=clock)
