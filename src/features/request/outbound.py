"""Translate a request into the options a transport needs to send it."""

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from src.features.request.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_ENCODING,
    DEFAULT_CONNECTION,
    DEFAULT_USER_AGENT,
    SUPPORTED_PROTOCOLS,
    ZERO_LENGTH_METHODS,
)
from src.features.request.errors import (
    InvalidURLError,
    RequestError,
    UnsupportedProtocolError,
)
from src.features.request.headers import Headers
from src.features.request.metrics import RequestMetrics
from src.features.request.redact import redact_headers, redact_url_credentials
from src.features.request.request import Request


logger = structlog.get_logger()


class OutboundOptions(BaseModel):
    """Transport-ready description of a request.

    Carries the URL components, the method, the headers in wire form and
    the connection agent. Building it never performs network I/O.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    protocol: str = Field(description="http: or https:")
    auth: str | None = Field(default=None, description="userinfo, if any")
    hostname: str = Field(min_length=1)
    host: str = Field(min_length=1, description="hostname[:port]")
    port: int | None = Field(default=None, description="Explicit port, if any")
    path: str = Field(description="Path plus query")
    href: str = Field(min_length=1, description="Full serialized URL")
    method: str = Field(min_length=1, description="Upper-case method")
    headers: dict[str, list[str]] = Field(
        default_factory=dict, description="Lower-cased name to values"
    )
    agent: Any = Field(default=None, description="Connection agent reference")


def build_outbound_options(
    request: Request,
    user_agent: str | None = None,
) -> OutboundOptions:
    """Build transport options for a request.

    The request is only read. Defaults are applied to a private copy of
    its headers: Accept, Content-Length, User-Agent, Accept-Encoding when
    compression is enabled, and Connection: close without a custom agent.

    Args:
        request: Request to translate.
        user_agent: User-Agent to apply when none is set on the request.

    Returns:
        OutboundOptions for the transport.

    Raises:
        InvalidURLError: If the URL has no scheme or no host.
        UnsupportedProtocolError: If the scheme is not http or https.
    """
    metrics = RequestMetrics.get_instance()
    try:
        options = _build(request, user_agent or DEFAULT_USER_AGENT)
    except RequestError as e:
        metrics.record_failure(e.error_class)
        raise

    metrics.record_outbound_built()
    logger.debug(
        "outbound_options_built",
        method=options.method,
        url=redact_url_credentials(options.href),
        headers=redact_headers(options.headers),
        has_agent=options.agent is not None,
    )
    return options


def _build(request: Request, user_agent: str) -> OutboundOptions:
    parsed = request.parsed_url
    headers = Headers(request.headers)

    if not headers.has("Accept"):
        headers.set("Accept", DEFAULT_ACCEPT)

    if not parsed.protocol or not parsed.hostname:
        raise InvalidURLError(parsed.href)
    if parsed.protocol.lower() not in SUPPORTED_PROTOCOLS:
        raise UnsupportedProtocolError(parsed.protocol)

    content_length = _content_length(request)
    if content_length is not None:
        headers.set("Content-Length", content_length)

    if not headers.has("User-Agent"):
        headers.set("User-Agent", user_agent)

    # A caller-supplied Accept-Encoding is left untouched
    if request.compress and not headers.has("Accept-Encoding"):
        headers.set("Accept-Encoding", DEFAULT_ACCEPT_ENCODING)

    if not headers.has("Connection") and request.agent is None:
        headers.set("Connection", DEFAULT_CONNECTION)

    return OutboundOptions(
        protocol=parsed.protocol.lower(),
        auth=parsed.auth,
        hostname=parsed.hostname,
        host=parsed.host or parsed.hostname,
        port=parsed.port,
        path=parsed.path or "/",
        href=parsed.href,
        method=request.method,
        headers=headers.raw(),
        agent=request.agent,
    )


def _content_length(request: Request) -> str | None:
    """Compute the Content-Length value, or None to leave it unset.

    Streams of unknown length get no value; the transport frames them.
    """
    if request.body is None:
        if request.method in ZERO_LENGTH_METHODS:
            return "0"
        return None
    total_bytes = request.body.get_total_bytes()
    if total_bytes is None:
        return None
    return str(total_bytes)
