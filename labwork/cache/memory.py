"""
Memory Cache Module

In-process cache for query results, with absolute expiration and an
LRU bound on the number of entries.

Absolute expiration: an entry expires `ttl` seconds after it was set,
no matter how often it is read in between.
"""

import inspect
import time
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, Tuple

from ..config.settings import settings

# Distinguishes "not cached" from a cached None
_MISSING = object()


class MemoryCache:
    """
    In-memory cache with per-entry absolute expiration and LRU eviction.

    This class provides O(1) average-case time complexity for:
    - set: Insert or replace an entry
    - get: Retrieve a value by key
    - delete: Remove an entry
    - exists: Check if a live entry exists

    Internal Storage:
        Uses OrderedDict for O(1) operations with LRU ordering.
        Format: key -> (value, expiration_timestamp)
        expiration_timestamp = 0 means no expiration

    Attributes:
        max_size: Maximum number of entries before LRU eviction
    """

    def __init__(self, max_size: int = None, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries (default from settings.CACHE_MAX_KEYS)
            clock: Time source in seconds

        Raises:
            ValueError: If max_size is not positive
        """
        self.max_size = max_size if max_size is not None else settings.CACHE_MAX_KEYS
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")

        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[Any, float]]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def _expired(self, expires_at: float) -> bool:
        return bool(expires_at) and expires_at <= self._clock()

    def set(self, key: str, value: Any, ttl: float = 0) -> None:
        """
        Insert or replace an entry.

        Args:
            key: Cache key
            value: Value to cache (any object, including None)
            ttl: Seconds until the entry expires (0 = never)

        Raises:
            ValueError: If ttl is negative
        """
        if ttl < 0:
            raise ValueError("ttl must not be negative")
        expires_at = self._clock() + ttl if ttl > 0 else 0

        if key in self._entries:
            self._entries[key] = (value, expires_at)
            self._entries.move_to_end(key)
            return

        if len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)

        self._entries[key] = (value, expires_at)

    def _lookup(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return _MISSING

        value, expires_at = entry
        if self._expired(expires_at):
            # Lazy expiration
            self._entries.pop(key, None)
            self._misses += 1
            return _MISSING

        self._entries.move_to_end(key)
        self._hits += 1
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieve the value for a key.

        Returns:
            The cached value if present and not expired, `default` otherwise
        """
        value = self._lookup(key)
        return default if value is _MISSING else value

    def get_or_set(self, key: str, factory: Callable[[], Any], ttl: float = 0) -> Any:
        """
        Return the cached value, or build it with `factory` and cache it.

        `factory` is only called on a miss.
        """
        value = self._lookup(key)
        if value is _MISSING:
            value = factory()
            self.set(key, value, ttl=ttl)
        return value

    async def get_or_set_async(
            self,
            key: str,
            factory: Callable[[], Awaitable[Any]],
            ttl: float = 0,
    ) -> Any:
        """Async variant of get_or_set(); `factory` returns an awaitable."""
        value = self._lookup(key)
        if value is _MISSING:
            value = factory()
            if inspect.isawaitable(value):
                value = await value
            self.set(key, value, ttl=ttl)
        return value

    def delete(self, key: str) -> bool:
        """
        Delete an entry.

        Returns:
            True if a live entry was deleted, False otherwise
        """
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        return not self._expired(entry[1])

    def exists(self, key: str) -> bool:
        """Check if a key holds a live (non-expired) entry."""
        entry = self._entries.get(key)
        if entry is None:
            return False
        if self._expired(entry[1]):
            self._entries.pop(key, None)
            return False
        return True

    def size(self) -> int:
        """
        Get the current number of entries.

        Note: This may include expired entries that haven't been cleaned up yet.
        """
        return len(self._entries)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries (active expiration).

        Returns:
            Number of entries removed
        """
        now = self._clock()
        to_delete = [k for k, (_, exp) in self._entries.items() if exp and exp <= now]
        for key in to_delete:
            self._entries.pop(key, None)
        return len(to_delete)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        now = self._clock()
        total = len(self._entries)
        expired = sum(1 for _, (_, exp) in self._entries.items() if exp and exp <= now)

        return {
            "total_keys": total,
            "expired_keys": expired,
            "active_keys": total - expired,
            "max_size": self.max_size,
            "hits": self._hits,
            "misses": self._misses,
            "utilization": total / self.max_size,
        }
