"""
Labwork Configuration Settings

This module contains all configuration constants for the labwork demos.
Every value can be overridden through a LABWORK_* environment variable.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Demo configuration settings."""

    # File I/O settings
    DATA_FILE: str = os.environ.get("LABWORK_DATA_FILE", "data.txt")
    DATA_MESSAGE: str = os.environ.get(
        "LABWORK_DATA_MESSAGE", "Some data to be written to the file"
    )
    FILE_ENCODING: str = "utf-8"
    BUFFER_SIZE: int = 8192

    # Sequence settings
    SEQUENCE_COUNT: int = int(os.environ.get("LABWORK_SEQUENCE_COUNT", "20"))

    # User store settings
    DATABASE_PATH: str = os.environ.get("LABWORK_DATABASE_PATH", ":memory:")
    CACHE_TTL: int = int(os.environ.get("LABWORK_CACHE_TTL", "300"))  # 5 minutes
    CACHE_MAX_KEYS: int = int(os.environ.get("LABWORK_CACHE_MAX_KEYS", "1000"))

    # Logging settings
    DEBUG: bool = os.environ.get("LABWORK_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("LABWORK_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
