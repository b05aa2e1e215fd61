"""Cache module for labwork."""

from .memory import MemoryCache

__all__ = ["MemoryCache"]
