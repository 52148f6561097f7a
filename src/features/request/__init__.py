"""Client-side HTTP request construction.

This module turns heterogeneous input into a normalized request and
translates it into transport options:
- Precedence resolution of construction options (option > input > default)
- Case-insensitive multi-value headers backed by httpx
- Bodies with length query and independent duplication
- Protocol defaults for Accept, Content-Length, User-Agent,
  Accept-Encoding and Connection
"""

from src.features.request.body import Body
from src.features.request.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_ENCODING,
    DEFAULT_FOLLOW,
    DEFAULT_USER_AGENT,
)
from src.features.request.errors import (
    BodyAlreadyUsedError,
    InvalidBodyForMethodError,
    InvalidHeaderError,
    InvalidURLError,
    RequestError,
    RequestErrorClass,
    UnsupportedProtocolError,
)
from src.features.request.headers import Headers
from src.features.request.metrics import RequestMetrics
from src.features.request.normalizer import NormalizedInput, normalize_input
from src.features.request.options import RedirectMode, RequestOptions
from src.features.request.outbound import OutboundOptions, build_outbound_options
from src.features.request.redact import redact_headers, redact_url_credentials
from src.features.request.request import Request
from src.features.request.transport import build_httpx_request
from src.features.request.url import ParsedURL, parse_url


__all__ = [
    # Entity
    "Request",
    "RequestOptions",
    "RedirectMode",
    # Collaborators
    "Headers",
    "Body",
    "ParsedURL",
    "parse_url",
    # Normalization
    "NormalizedInput",
    "normalize_input",
    # Outbound
    "OutboundOptions",
    "build_outbound_options",
    "build_httpx_request",
    # Errors
    "RequestError",
    "RequestErrorClass",
    "InvalidBodyForMethodError",
    "InvalidURLError",
    "UnsupportedProtocolError",
    "InvalidHeaderError",
    "BodyAlreadyUsedError",
    # Constants
    "DEFAULT_ACCEPT",
    "DEFAULT_ACCEPT_ENCODING",
    "DEFAULT_FOLLOW",
    "DEFAULT_USER_AGENT",
    # Metrics
    "RequestMetrics",
    # Redaction
    "redact_headers",
    "redact_url_credentials",
]
