"""Unit tests for structured logging configuration."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from src.features.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    resolve_level,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestResolveLevel:
    """Tests for resolve_level function."""

    def test_numeric_level_passthrough(self) -> None:
        """Test that numeric levels are returned unchanged."""
        assert resolve_level(logging.WARNING) == logging.WARNING

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("debug", logging.DEBUG), ("INFO", logging.INFO), ("Error", logging.ERROR)],
    )
    def test_level_names(self, name: str, expected: int) -> None:
        """Test case-insensitive level names."""
        assert resolve_level(name) == expected

    def test_unknown_level(self) -> None:
        """Test that unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            resolve_level("chatty")


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_json_output_with_request_context(self) -> None:
        """Test that JSON lines include bound request context."""
        output = io.StringIO()
        configure_logging(level="info", output=output, json_format=True)
        bind_request_context("req-123")

        get_logger().info("request_built", method="POST")

        record = json.loads(output.getvalue().strip().splitlines()[-1])
        assert record["event"] == "request_built"
        assert record["method"] == "POST"
        assert record["request_id"] == "req-123"
        assert record["level"] == "info"

    def test_level_filtering(self) -> None:
        """Test that events below the level are dropped."""
        output = io.StringIO()
        configure_logging(level=logging.WARNING, output=output)

        get_logger().info("dropped")

        assert output.getvalue() == ""

    def test_clear_request_context(self) -> None:
        """Test that clearing removes the request id."""
        output = io.StringIO()
        configure_logging(output=output)
        bind_request_context("req-1")
        clear_request_context()

        get_logger().info("after_clear")

        record = json.loads(output.getvalue().strip().splitlines()[-1])
        assert "request_id" not in record
