"""
Tests for the memoized Fibonacci evaluator

Run with: python -m pytest tests/test_evaluator.py -v
"""

import threading

import pytest

from labwork.sequence.evaluator import FibonacciEvaluator, NegativeIndexError

EXPECTED = [
    0, 1, 1, 2, 3, 5, 8, 13, 21, 34,
    55, 89, 144, 233, 377, 610, 987, 1597, 2584, 4181,
]


class TestEvaluateValues:
    """Test evaluate() results."""

    @pytest.mark.parametrize("n,expected", [(0, 0), (1, 1), (2, 1), (5, 5), (10, 55), (19, 4181)])
    def test_known_values(self, evaluator: FibonacciEvaluator, n, expected):
        assert evaluator.evaluate(n) == expected

    def test_first_twenty_terms(self, evaluator: FibonacciEvaluator):
        assert [evaluator.evaluate(i) for i in range(20)] == EXPECTED

    def test_recurrence_holds(self, evaluator: FibonacciEvaluator):
        """F(n) == F(n-1) + F(n-2) for every n in [2, 20)."""
        for n in range(2, 20):
            assert evaluator.evaluate(n) == evaluator.evaluate(n - 1) + evaluator.evaluate(n - 2)

    def test_descending_queries(self, evaluator: FibonacciEvaluator):
        """Querying high indices first gives the same answers."""
        assert [evaluator.evaluate(i) for i in reversed(range(20))] == EXPECTED[::-1]

    def test_large_index_has_no_recursion_limit(self, evaluator: FibonacciEvaluator):
        value = evaluator.evaluate(5000)
        assert value == evaluator.evaluate(4999) + evaluator.evaluate(4998)
        assert evaluator.evaluate(100) == 354224848179261915075

    def test_large_values_do_not_overflow(self, evaluator: FibonacciEvaluator):
        assert evaluator.evaluate(93) == 12200160415121876738
        assert evaluator.evaluate(93) > 2 ** 63

    def test_sequence(self, evaluator: FibonacciEvaluator):
        assert evaluator.sequence(20) == EXPECTED
        assert evaluator.sequence(0) == []


class TestMemoization:
    """Test cache growth and reuse."""

    def test_cache_starts_empty(self, evaluator: FibonacciEvaluator):
        assert evaluator.size() == 0
        assert len(evaluator) == 0
        assert evaluator.highest_index == -1

    def test_evaluate_fills_intermediate_indices(self, evaluator: FibonacciEvaluator):
        evaluator.evaluate(10)
        assert evaluator.cached_indices() == list(range(11))
        for i in range(11):
            assert i in evaluator

    def test_idempotent(self, evaluator: FibonacciEvaluator):
        first = evaluator.evaluate(15)
        size = evaluator.size()

        second = evaluator.evaluate(15)

        assert first == second
        assert evaluator.size() == size

    def test_hit_does_not_grow_cache(self, evaluator: FibonacciEvaluator):
        evaluator.evaluate(10)
        evaluator.evaluate(3)
        assert evaluator.size() == 11

    def test_cache_grows_monotonically(self, evaluator: FibonacciEvaluator):
        sizes = []
        for n in [3, 1, 8, 8, 0, 12, 5, 19]:
            evaluator.evaluate(n)
            sizes.append(evaluator.size())
        assert sizes == sorted(sizes)
        assert sizes[-1] == 20

    def test_stats_count_hits_and_misses(self, evaluator: FibonacciEvaluator):
        evaluator.evaluate(10)
        evaluator.evaluate(10)
        evaluator.evaluate(4)
        evaluator.evaluate(12)

        stats = evaluator.get_stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 2
        assert stats["cached_terms"] == 13
        assert stats["highest_index"] == 12

    def test_instances_do_not_share_cache(self):
        a = FibonacciEvaluator()
        b = FibonacciEvaluator()
        a.evaluate(10)
        assert b.size() == 0


class TestInvalidInput:
    """Test rejection of invalid indices."""

    def test_negative_index_raises(self, evaluator: FibonacciEvaluator):
        with pytest.raises(NegativeIndexError) as exc_info:
            evaluator.evaluate(-1)
        assert exc_info.value.index == -1

    def test_negative_index_is_value_error(self, evaluator: FibonacciEvaluator):
        with pytest.raises(ValueError):
            evaluator.evaluate(-5)

    def test_contains_rejects_non_int(self, evaluator: FibonacciEvaluator):
        evaluator.evaluate(5)
        assert 1 in evaluator
        assert True not in evaluator
        assert 1.0 not in evaluator
        assert "1" not in evaluator

    def test_negative_index_leaves_cache_untouched(self, evaluator: FibonacciEvaluator):
        evaluator.evaluate(4)
        with pytest.raises(NegativeIndexError):
            evaluator.evaluate(-3)
        assert evaluator.cached_indices() == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("bad", [1.0, "3", None, True])
    def test_non_int_raises_type_error(self, evaluator: FibonacciEvaluator, bad):
        with pytest.raises(TypeError):
            evaluator.evaluate(bad)
        assert evaluator.size() == 0


class TestThreadSafety:
    """Test one evaluator shared between threads."""

    def test_concurrent_evaluation(self, evaluator: FibonacciEvaluator):
        results = {}

        def worker(n: int) -> None:
            results[n] = evaluator.evaluate(n)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(200)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        reference = FibonacciEvaluator()
        assert results == {n: reference.evaluate(n) for n in range(200)}
        assert evaluator.cached_indices() == list(range(200))
