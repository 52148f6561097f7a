"""Hand a built request over to httpx without sending it."""

from typing import Any

import httpx

from src.features.request.headers import HEADER_ENCODING
from src.features.request.outbound import OutboundOptions, build_outbound_options
from src.features.request.request import Request


def build_httpx_request(
    request: Request,
    options: OutboundOptions | None = None,
) -> httpx.Request:
    """Convert a request and its outbound options into an unsent httpx.Request.

    The request body is consumed. Clone the request first if it must stay
    readable. Streams are passed through as an iterator, so httpx frames
    them with chunked transfer encoding.

    Args:
        request: Request to convert.
        options: Prebuilt outbound options; built from the request if None.

    Returns:
        httpx.Request ready for ``httpx.Client.send``.
    """
    if options is None:
        options = build_outbound_options(request)

    headers = httpx.Headers(
        [(name, value) for name, values in options.headers.items() for value in values],
        encoding=HEADER_ENCODING,
    )

    body = request.body
    content = None
    if body is not None:
        content = body.iter_bytes() if body.is_stream else body.read()

    extensions: dict[str, Any] = {}
    if request.timeout:
        extensions["timeout"] = httpx.Timeout(request.timeout / 1000).as_dict()

    return httpx.Request(
        options.method,
        options.href,
        headers=headers,
        content=content,
        extensions=extensions,
    )
