"""Unit tests for request error types."""

from src.features.request.errors import (
    BodyAlreadyUsedError,
    InvalidBodyForMethodError,
    InvalidHeaderError,
    InvalidURLError,
    RequestError,
    RequestErrorClass,
    UnsupportedProtocolError,
)


class TestRequestErrors:
    """Tests for the request error hierarchy."""

    def test_all_errors_share_base(self) -> None:
        """Test that every error is a RequestError."""
        errors = [
            InvalidBodyForMethodError("GET"),
            InvalidURLError("/relative"),
            UnsupportedProtocolError("ftp:"),
            InvalidHeaderError("Bad Name", "not a valid HTTP token"),
            BodyAlreadyUsedError(),
        ]

        for error in errors:
            assert isinstance(error, RequestError)
            assert str(error) == error.message

    def test_invalid_body_for_method(self) -> None:
        """Test message and details for a GET with body."""
        error = InvalidBodyForMethodError("HEAD")

        assert error.error_class == RequestErrorClass.INVALID_BODY_FOR_METHOD
        assert error.method == "HEAD"
        assert "HEAD" in error.message

    def test_to_dict(self) -> None:
        """Test dictionary serialization."""
        error = UnsupportedProtocolError("ftp:")

        assert error.to_dict() == {
            "error_class": "UNSUPPORTED_PROTOCOL",
            "message": "Only HTTP(S) protocols are supported, got 'ftp:'",
            "details": {"protocol": "ftp:"},
        }

    def test_error_class_values(self) -> None:
        """Test that enum values match their names."""
        for error_class in RequestErrorClass:
            assert error_class.value == error_class.name
