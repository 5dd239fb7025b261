"""
Custom exceptions for the collection loader with structured error context.

Each exception carries a context dictionary so that failures can be logged
with enough detail to tell which table, page or record was involved.

Exception Hierarchy:
    LoaderException (base)
    ├── ConfigError
    ├── ExtractionError
    │   ├── RateLimitError
    │   └── TransportError
    │       └── ResponseFormatError
    ├── TransformationError
    │   ├── ValidationError
    │   └── MappingError
    ├── LoadError
    │   └── StoreError
    └── RetryableError / NonRetryableError (mixins)
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class LoaderException(Exception):
    """
    Base exception for all loader errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (table, url, record id, ...)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Retry Strategy Mixins
# ============================================================================

class RetryableError(LoaderException):
    """
    Mixin for errors that may succeed when the same request is repeated.

    Only rate limiting (HTTP 429) is retried by the fetcher.
    """
    pass


class NonRetryableError(LoaderException):
    """
    Mixin for errors that are never retried.

    Connection failures, non-429 HTTP errors, bad configuration and
    schema rejections all fall in this group.
    """
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigError(NonRetryableError):
    """
    Raised when the loader configuration is unusable.

    Missing base URL or API token is fatal and is raised before any
    network activity.
    """
    pass


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(LoaderException):
    """Base exception for record fetching failures."""
    pass


class RateLimitError(RetryableError, ExtractionError):
    """
    Rate limiting (HTTP 429).

    Context should include:
        - api_url: The endpoint that rate limited us
        - offset: Cursor of the page being fetched
        - retry_count: Number of retries attempted for that page
        - retry_after: Delay the next retry would have waited, once the budget is spent
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message, context, original_exception)
        self.retry_after = retry_after  # Seconds the next wait would have been
        if retry_after:
            self.context["retry_after"] = retry_after


class TransportError(NonRetryableError, ExtractionError):
    """
    Any other network or HTTP failure.

    Context should include:
        - api_url: The endpoint that failed
        - status_code: HTTP status code (if a response was received)
        - offset: Cursor of the page being fetched
    """
    pass


class ResponseFormatError(TransportError):
    """Response body could not be decoded as a records page."""
    pass


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(LoaderException):
    """Base exception for record transformation failures."""
    pass


class ValidationError(NonRetryableError, TransformationError):
    """
    Raised when a table schema rejects a mapped record.

    Context should include:
        - table_id: Table the record came from
        - record_id: Identity derived for the record
        - errors: Structured errors reported by the schema engine
    """
    pass


class MappingError(NonRetryableError, TransformationError):
    """Raised when a table's mapper fails on a raw record."""
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(LoaderException):
    """Base exception for store failures."""
    pass


class StoreError(LoadError):
    """
    Raised when an entry cannot be written to the destination store.

    Context should include:
        - record_id: ID of the entry being stored
    """
    pass
