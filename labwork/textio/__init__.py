"""Text file I/O module for labwork."""

from .lines import LineFile

__all__ = ["LineFile"]
