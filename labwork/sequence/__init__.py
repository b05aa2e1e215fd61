"""Sequence module for labwork."""

from .evaluator import FibonacciEvaluator, NegativeIndexError

__all__ = ["FibonacciEvaluator", "NegativeIndexError"]
