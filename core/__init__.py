"""
Core utilities and configuration for the NocoDB collection loader.

This package provides foundational components used throughout the loader:

Modules:
    config: Settings and environment variable management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.exceptions import ConfigError, RateLimitError, TransportError
    from core.logging import setup_logging

Example:
    setup_logging()

    if not settings.API_URL:
        raise ConfigError("API_URL is not set")
"""

from core.config import settings
from core.logging import setup_logging
from core.exceptions import (
    LoaderException,
    ConfigError,
    ExtractionError,
    RateLimitError,
    TransportError,
    ResponseFormatError,
    TransformationError,
    ValidationError,
    MappingError,
    LoadError,
    StoreError,
    RetryableError,
    NonRetryableError,
)

__all__ = [
    "settings",
    "setup_logging",
    # Exceptions
    "LoaderException",
    "ConfigError",
    "ExtractionError",
    "RateLimitError",
    "TransportError",
    "ResponseFormatError",
    "TransformationError",
    "ValidationError",
    "MappingError",
    "LoadError",
    "StoreError",
    "RetryableError",
    "NonRetryableError",
]
