"""
Labwork: Teaching Demos

A memoized Fibonacci evaluator with async file line I/O, and a small
user/order data layer over an in-memory database with a memory cache.
"""

__version__ = "1.0.0"
