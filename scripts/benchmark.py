#!/usr/bin/env python3
"""
Benchmark Script for the Fibonacci Evaluator

Compares naive recursion with the memoized evaluator, and measures
cache-hit lookups on a warm evaluator.

Usage:
    python scripts/benchmark.py                 # Run all benchmarks
    python scripts/benchmark.py --naive-max 25  # Largest index for naive recursion
    python scripts/benchmark.py --index 5000    # Index for the cold/warm runs
"""

import argparse
import os
import statistics
import sys
import time
from typing import Any, Callable, Dict

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from labwork.sequence.evaluator import FibonacciEvaluator


def naive_fib(n: int) -> int:
    if n <= 1:
        return n
    return naive_fib(n - 1) + naive_fib(n - 2)


def measure_time(func: Callable, iterations: int = 1) -> Dict[str, float]:
    """Measure execution time statistics."""
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = (time.perf_counter() - start) * 1000  # Convert to ms
        times.append(elapsed)

    return {
        "min_ms": min(times),
        "max_ms": max(times),
        "mean_ms": statistics.mean(times),
        "median_ms": statistics.median(times),
        "total_ms": sum(times),
    }


class Benchmark:
    """Collection of benchmarks for the evaluator."""

    def __init__(self, naive_max: int = 25, index: int = 5000, iterations: int = 5):
        self.naive_max = naive_max
        self.index = index
        self.iterations = iterations

    def benchmark_naive(self) -> Dict[str, Any]:
        """F(0) .. F(naive_max) with plain recursion."""
        def run():
            for i in range(self.naive_max + 1):
                naive_fib(i)

        stats = measure_time(run, self.iterations)
        stats["operation"] = f"naive F(0..{self.naive_max})"
        return stats

    def benchmark_memoized(self) -> Dict[str, Any]:
        """F(0) .. F(naive_max) with a fresh evaluator per iteration."""
        def run():
            evaluator = FibonacciEvaluator()
            for i in range(self.naive_max + 1):
                evaluator.evaluate(i)

        stats = measure_time(run, self.iterations)
        stats["operation"] = f"memoized F(0..{self.naive_max})"
        return stats

    def benchmark_cold(self) -> Dict[str, Any]:
        """A single large index on an empty cache."""
        stats = measure_time(lambda: FibonacciEvaluator().evaluate(self.index), self.iterations)
        stats["operation"] = f"cold F({self.index})"
        return stats

    def benchmark_warm(self) -> Dict[str, Any]:
        """Repeated lookups of every cached index."""
        evaluator = FibonacciEvaluator()
        evaluator.evaluate(self.index)

        def run():
            for i in range(self.index + 1):
                evaluator.evaluate(i)

        stats = measure_time(run, self.iterations)
        stats["operation"] = f"warm F(0..{self.index})"
        stats["ops_per_second"] = (self.index + 1) / (stats["mean_ms"] / 1000)
        return stats

    def run_all(self) -> None:
        results = [
            self.benchmark_naive(),
            self.benchmark_memoized(),
            self.benchmark_cold(),
            self.benchmark_warm(),
        ]

        print("=" * 60)
        print(f"{'Operation':<30}{'Mean (ms)':>14}{'Median (ms)':>14}")
        print("-" * 60)
        for r in results:
            print(f"{r['operation']:<30}{r['mean_ms']:>14.3f}{r['median_ms']:>14.3f}")
        print("=" * 60)


def main() -> None:
    parser = argparse.ArgumentParser(description="Fibonacci evaluator benchmarks")
    parser.add_argument("--naive-max", type=int, default=25, help="Largest index for naive recursion")
    parser.add_argument("--index", type=int, default=5000, help="Index for cold/warm runs")
    parser.add_argument("--iterations", type=int, default=5, help="Iterations per benchmark")
    args = parser.parse_args()

    Benchmark(args.naive_max, args.index, args.iterations).run_all()


if __name__ == "__main__":
    main()
