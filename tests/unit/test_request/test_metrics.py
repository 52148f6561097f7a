"""Unit tests for request metrics."""

from collections.abc import Iterator

import pytest

from src.features.request.errors import (
    InvalidBodyForMethodError,
    RequestErrorClass,
    UnsupportedProtocolError,
)
from src.features.request.metrics import RequestMetrics
from src.features.request.outbound import build_outbound_options
from src.features.request.request import Request


@pytest.fixture(autouse=True)
def fresh_metrics() -> Iterator[None]:
    """Reset the metrics singleton around each test."""
    RequestMetrics.reset()
    yield
    RequestMetrics.reset()


class TestRequestMetrics:
    """Tests for RequestMetrics."""

    def test_singleton(self) -> None:
        """Test that get_instance returns the same object until reset."""
        first = RequestMetrics.get_instance()

        assert RequestMetrics.get_instance() is first
        RequestMetrics.reset()
        assert RequestMetrics.get_instance() is not first

    def test_counts_construction_and_clone(self) -> None:
        """Test that clones count as constructions too."""
        request = Request("http://example.com")
        request.clone()

        metrics = RequestMetrics.get_instance()
        assert metrics.requests_constructed_total == 2
        assert metrics.requests_cloned_total == 1

    def test_counts_outbound_builds(self) -> None:
        """Test that successful builds are counted."""
        build_outbound_options(Request("http://example.com"))

        assert RequestMetrics.get_instance().outbound_built_total == 1

    def test_counts_failures_by_class(self) -> None:
        """Test that failures are counted by error class."""
        with pytest.raises(InvalidBodyForMethodError):
            Request("http://example.com", body="x")
        with pytest.raises(UnsupportedProtocolError):
            build_outbound_options(Request("ftp://example.com"))

        metrics = RequestMetrics.get_instance()
        assert metrics.failures_total == {
            RequestErrorClass.INVALID_BODY_FOR_METHOD.value: 1,
            RequestErrorClass.UNSUPPORTED_PROTOCOL.value: 1,
        }
        assert metrics.requests_constructed_total == 1
        assert metrics.outbound_built_total == 0

    def test_to_dict(self) -> None:
        """Test the dictionary form."""
        metrics = RequestMetrics.get_instance()
        metrics.record_construction()
        metrics.record_failure(RequestErrorClass.INVALID_URL)

        assert metrics.to_dict() == {
            "requests_constructed_total": 1,
            "requests_cloned_total": 0,
            "outbound_built_total": 0,
            "failures_total": {"INVALID_URL": 1},
        }
