"""
Unit tests for settings and the exception hierarchy
"""

import logging
import pytest

from core.config import Settings
from core.logging import setup_logging
from core.exceptions import (
    ConfigError,
    ExtractionError,
    LoaderException,
    NonRetryableError,
    RateLimitError,
    RetryableError,
    ResponseFormatError,
    TransportError,
    ValidationError
)


class TestSettings:
    """Environment driven configuration"""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("API_URL", "https://nocodb.example.com")
        monkeypatch.setenv("API_TOKEN", "secret")
        monkeypatch.setenv("MAX_RETRY_DELAY", "60")
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")

        settings = Settings(_env_file=None)

        assert settings.API_URL == "https://nocodb.example.com"
        assert settings.API_TOKEN == "secret"
        assert settings.MAX_RETRY_DELAY == 60.0
        assert settings.DEFAULT_PAGE_SIZE == 25

    def test_defaults(self, monkeypatch):
        for name in ["API_URL", "API_TOKEN", "MAX_RETRIES", "RETRY_DELAY", "MAX_RETRY_DELAY", "DEFAULT_PAGE_SIZE"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.API_URL is None
        assert settings.API_TOKEN is None
        assert settings.MAX_RETRIES == 10
        assert settings.RETRY_DELAY == 2.0
        assert settings.MAX_RETRY_DELAY is None
        assert settings.DEFAULT_PAGE_SIZE == 100


class TestLogging:
    """Root logger setup"""

    def test_level_override_and_quiet_httpx(self):
        root = logging.getLogger()
        previous_level, previous_handlers = root.level, root.handlers[:]

        try:
            setup_logging("debug")

            assert root.level == logging.DEBUG
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers = previous_handlers
            root.setLevel(previous_level)


class TestExceptions:
    """Structured error context"""

    def test_context_and_cause(self):
        cause = ConnectionError("refused")
        error = TransportError(
            "Request failed",
            context={"api_url": "https://x", "offset": 100},
            original_exception=cause
        )

        assert error.__cause__ is cause
        assert error.context["offset"] == 100
        assert "error_timestamp" in error.context
        assert "Caused by: ConnectionError: refused" in str(error)

    def test_to_dict(self):
        error = RateLimitError("Too many requests", context={"offset": 0}, retry_after=4.0)

        data = error.to_dict()

        assert data["error_type"] == "RateLimitError"
        assert data["message"] == "Too many requests"
        assert data["context"]["retry_after"] == 4.0
        assert data["original_error"] is None

    @pytest.mark.parametrize("error_cls,bases", [
        (RateLimitError, (RetryableError, ExtractionError)),
        (TransportError, (NonRetryableError, ExtractionError)),
        (ResponseFormatError, (TransportError,)),
        (ConfigError, (NonRetryableError,)),
        (ValidationError, (NonRetryableError,)),
    ])
    def test_hierarchy(self, error_cls, bases):
        error = error_cls("x")

        assert isinstance(error, LoaderException)
        for base in bases:
            assert isinstance(error, base)
