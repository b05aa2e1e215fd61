"""
Memoized Sequence Evaluator Module

This module implements a Fibonacci evaluator that caches every computed
term for the lifetime of the instance:

    F(0) = 0
    F(1) = 1
    F(n) = F(n - 1) + F(n - 2)

Evaluation is a bottom-up fill of the cache from the highest cached index
up to the requested one, so no index is ever computed twice and large
indices never hit the interpreter's recursion limit.
"""

import logging
import threading
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class NegativeIndexError(ValueError):
    """Raised when a sequence term is requested for a negative index."""

    def __init__(self, index: int):
        super().__init__(f"sequence index must be non-negative, got {index}")
        self.index = index


class FibonacciEvaluator:
    """
    Fibonacci evaluator with a per-instance memoization cache.

    The cache maps index -> F(index). It starts empty, only ever grows,
    and always holds a contiguous run of indices 0..highest_index, because
    every miss fills all indices between the last cached one and the
    requested one.

    Usage:
        fib = FibonacciEvaluator()
        fib.evaluate(10)   # 55, caches indices 0..10
        fib.evaluate(5)    # 5, served from cache
        10 in fib          # True

    Lookup-then-insert runs under a lock, so a single instance may be
    shared between threads.

    Python integers are arbitrary precision: large indices never overflow,
    they only cost memory (F(n) needs roughly 0.7 * n bits).
    """

    def __init__(self):
        self._cache: Dict[int, int] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def evaluate(self, n: int) -> int:
        """
        Return F(n), computing and caching it on first request.

        Args:
            n: Non-negative sequence index

        Returns:
            The n-th Fibonacci number

        Raises:
            TypeError: If n is not an int
            NegativeIndexError: If n is negative

        Time Complexity: O(1) on a cache hit, O(n - highest_index) on a miss
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"sequence index must be an int, got {type(n).__name__}")
        if n < 0:
            raise NegativeIndexError(n)

        with self._lock:
            if n in self._cache:
                self._hits += 1
                return self._cache[n]

            self._misses += 1
            cache = self._cache
            for i in range(len(cache), n + 1):
                cache[i] = i if i <= 1 else cache[i - 1] + cache[i - 2]

            logger.debug(f"Filled sequence cache up to index {n}")
            return cache[n]

    def sequence(self, count: int) -> List[int]:
        """Return the first `count` terms, F(0) .. F(count - 1)."""
        if count <= 0:
            return []
        self.evaluate(count - 1)
        return [self._cache[i] for i in range(count)]

    def cached_indices(self) -> List[int]:
        """Get all cached indices in increasing order."""
        with self._lock:
            return sorted(self._cache)

    @property
    def highest_index(self) -> int:
        """Highest cached index, or -1 if nothing has been evaluated yet."""
        return len(self._cache) - 1

    def size(self) -> int:
        """Get the current number of cached terms."""
        return len(self._cache)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, n: object) -> bool:
        if isinstance(n, bool) or not isinstance(n, int):
            return False
        return n in self._cache

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the evaluator cache.

        Returns:
            Dictionary containing:
            - cached_terms: Number of cached indices
            - highest_index: Largest cached index (-1 when empty)
            - hits: evaluate() calls served directly from the cache
            - misses: evaluate() calls that extended the cache
        """
        with self._lock:
            return {
                "cached_terms": len(self._cache),
                "highest_index": len(self._cache) - 1,
                "hits": self._hits,
                "misses": self._misses,
            }
