"""Configuration module for labwork."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
