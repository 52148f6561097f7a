"""Error types for request construction and outbound option building.

All errors are raised synchronously to the caller of construction or of the
options builder. Nothing in this package retries or swallows them.
"""

from enum import Enum


class RequestErrorClass(str, Enum):
    """Classification of request errors.

    - INVALID_BODY_FOR_METHOD: GET/HEAD request constructed with a body
    - INVALID_URL: URL lacks a scheme or host when building outbound options
    - UNSUPPORTED_PROTOCOL: URL scheme is neither http nor https
    - INVALID_HEADER: Header name or value is not valid on the wire
    - BODY_ALREADY_USED: Body consumed or cloned after being read
    """

    INVALID_BODY_FOR_METHOD = "INVALID_BODY_FOR_METHOD"
    INVALID_URL = "INVALID_URL"
    UNSUPPORTED_PROTOCOL = "UNSUPPORTED_PROTOCOL"
    INVALID_HEADER = "INVALID_HEADER"
    BODY_ALREADY_USED = "BODY_ALREADY_USED"


class RequestError(Exception):
    """Base exception for request errors.

    Carries an error class so callers can branch on the kind of failure
    without matching on message text.
    """

    error_class: RequestErrorClass

    def __init__(
        self,
        error_class: RequestErrorClass,
        message: str,
        details: dict[str, str | int | None] | None = None,
    ) -> None:
        """Initialize the request error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | None]]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidBodyForMethodError(RequestError):
    """Raised when a GET or HEAD request is constructed with a body."""

    def __init__(self, method: str) -> None:
        """Initialize the error with the offending method.

        Args:
            method: The resolved upper-case method.
        """
        self.method = method
        super().__init__(
            RequestErrorClass.INVALID_BODY_FOR_METHOD,
            f"Request with {method} method cannot have body",
            details={"method": method},
        )


class InvalidURLError(RequestError):
    """Raised when a URL is not absolute (missing scheme or host)."""

    def __init__(self, url: str) -> None:
        """Initialize the error with the rejected URL.

        Args:
            url: The serialized URL that was rejected.
        """
        self.url = url
        super().__init__(
            RequestErrorClass.INVALID_URL,
            f"Only absolute URLs are supported: {url!r}",
            details={"url": url},
        )


class UnsupportedProtocolError(RequestError):
    """Raised when a URL scheme is neither http nor https."""

    def __init__(self, protocol: str) -> None:
        """Initialize the error with the rejected protocol.

        Args:
            protocol: The protocol in ``scheme:`` form.
        """
        self.protocol = protocol
        super().__init__(
            RequestErrorClass.UNSUPPORTED_PROTOCOL,
            f"Only HTTP(S) protocols are supported, got {protocol!r}",
            details={"protocol": protocol},
        )


class InvalidHeaderError(RequestError):
    """Raised when a header name or value cannot be sent on the wire."""

    def __init__(self, name: str, reason: str) -> None:
        """Initialize the error.

        Args:
            name: Header name as supplied.
            reason: Why the header was rejected.
        """
        self.name = name
        super().__init__(
            RequestErrorClass.INVALID_HEADER,
            f"Invalid header {name!r}: {reason}",
            details={"name": name},
        )


class BodyAlreadyUsedError(RequestError):
    """Raised when a body is read or cloned after it was consumed."""

    def __init__(self) -> None:
        """Initialize the error."""
        super().__init__(
            RequestErrorClass.BODY_ALREADY_USED,
            "Body has already been used",
        )
