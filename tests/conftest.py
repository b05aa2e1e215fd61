"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

from typing import Generator

import pytest

from labwork.cache.memory import MemoryCache
from labwork.sequence.evaluator import FibonacciEvaluator
from labwork.textio.lines import LineFile
from labwork.users.database import Database
from labwork.users.service import UserService


class FakeClock:
    """Manually advanced time source for expiration tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Evaluator Fixtures
# ============================================================================

@pytest.fixture
def evaluator() -> FibonacciEvaluator:
    """Create a fresh evaluator with an empty cache."""
    return FibonacciEvaluator()


# ============================================================================
# Cache Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    """Create a MemoryCache (100 entries) driven by a fake clock."""
    return MemoryCache(max_size=100, clock=clock)


@pytest.fixture
def small_cache(clock: FakeClock) -> MemoryCache:
    """Create a MemoryCache with small capacity for eviction testing (3 entries)."""
    return MemoryCache(max_size=3, clock=clock)


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def line_file(tmp_path) -> LineFile:
    """A LineFile pointing at a not-yet-created file."""
    return LineFile(str(tmp_path / "data.txt"))


# ============================================================================
# User Store Fixtures
# ============================================================================

@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Create a fresh in-memory database."""
    db = Database(":memory:")
    yield db
    db.close()


@pytest.fixture
def service(database: Database, cache: MemoryCache) -> UserService:
    """Create a UserService with a 300 second cache TTL."""
    return UserService(database, cache, cache_ttl=300)


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
