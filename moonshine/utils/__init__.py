"""Utility modules for Moonshine."""

from moonshine.utils.exceptions import (
    ConfigurationError,
    EmbeddingError,
    MoonshineError,
    NotFoundError,
    ReadOnlyError,
    StoreError,
    ValidationError,
)
from moonshine.utils.id_generator import generate_mash_id, now_ms
from moonshine.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # IDs and time
    "generate_mash_id",
    "now_ms",
    # Exceptions
    "MoonshineError",
    "StoreError",
    "ValidationError",
    "NotFoundError",
    "ReadOnlyError",
    "ConfigurationError",
    "EmbeddingError",
]
