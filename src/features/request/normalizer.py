"""Resolve heterogeneous request input into canonical construction fields.

Every field follows the same precedence chain: an explicit option wins,
then the value inherited from an input request, then the built-in default.
Each chain has its own resolver so it can be tested on its own.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from src.features.request.body import Body
from src.features.request.constants import (
    BODYLESS_METHODS,
    DEFAULT_COMPRESS,
    DEFAULT_COUNTER,
    DEFAULT_FOLLOW,
    DEFAULT_METHOD,
    DEFAULT_SIZE_BYTES,
    DEFAULT_TIMEOUT_MS,
)
from src.features.request.errors import InvalidBodyForMethodError
from src.features.request.headers import Headers
from src.features.request.options import RedirectMode, RequestOptions
from src.features.request.url import ParsedURL, parse_url, url_reference


@runtime_checkable
class InheritableRequest(Protocol):
    """Fields a request exposes when it is used as construction input."""

    parsed_url: ParsedURL
    method: str
    headers: Headers
    body: Body | None
    redirect: RedirectMode
    follow: int
    compress: bool
    counter: int
    agent: Any
    timeout: int
    size: int


@dataclass(frozen=True)
class NormalizedInput:
    """Canonical fields for request construction."""

    url: ParsedURL
    method: str
    headers: Headers
    body: Body | None
    redirect: RedirectMode
    follow: int
    compress: bool
    counter: int
    agent: Any
    timeout: int
    size: int


def as_inherited(raw_input: object) -> InheritableRequest | None:
    """Return the input if it is an existing request, otherwise None."""
    if isinstance(raw_input, InheritableRequest):
        return raw_input
    return None


def resolve_url(raw_input: object, inherited: InheritableRequest | None) -> ParsedURL:
    """Resolve the request URL.

    Args:
        raw_input: String, URL-like object, or existing request.
        inherited: The input as a request, if it is one.

    Returns:
        Parsed URL; a request input's URL is reused as-is.
    """
    if inherited is not None:
        return inherited.parsed_url
    reference = url_reference(raw_input)
    if reference is not None:
        return parse_url(reference)
    return parse_url(str(raw_input))


def resolve_method(
    options: RequestOptions, inherited: InheritableRequest | None
) -> str:
    """Resolve the upper-cased method: option, then input request, then GET."""
    if options.method is not None:
        return options.method.upper()
    if inherited is not None and inherited.method:
        return inherited.method.upper()
    return DEFAULT_METHOD


def resolve_timeout(
    options: RequestOptions, inherited: InheritableRequest | None
) -> int:
    """Resolve the timeout in milliseconds (0 = unlimited)."""
    if options.timeout is not None:
        return options.timeout
    if inherited is not None:
        return inherited.timeout
    return DEFAULT_TIMEOUT_MS


def resolve_size(options: RequestOptions, inherited: InheritableRequest | None) -> int:
    """Resolve the maximum response size in bytes (0 = unlimited)."""
    if options.size is not None:
        return options.size
    if inherited is not None:
        return inherited.size
    return DEFAULT_SIZE_BYTES


def resolve_body(
    options: RequestOptions,
    inherited: InheritableRequest | None,
    timeout: int = DEFAULT_TIMEOUT_MS,
    size: int = DEFAULT_SIZE_BYTES,
) -> Body | None:
    """Resolve the request body.

    A supplied Body instance is cloned rather than shared. An inherited
    body is always cloned, so the input request stays readable.

    Args:
        options: Caller options.
        inherited: The input as a request, if it is one.
        timeout: Resolved timeout to carry on the body.
        size: Resolved size limit to carry on the body.

    Returns:
        Body owned by the new request, or None.
    """
    if options.body is not None:
        if isinstance(options.body, Body):
            body = options.body.clone()
        else:
            body = Body(options.body)
    elif inherited is not None and inherited.body is not None:
        body = inherited.body.clone()
    else:
        return None

    body.timeout = timeout
    body.size = size
    return body


def resolve_headers(
    options: RequestOptions, inherited: InheritableRequest | None
) -> Headers:
    """Resolve a private copy of the request headers."""
    if options.headers is not None:
        return Headers(options.headers)
    if inherited is not None:
        return Headers(inherited.headers)
    return Headers()


def resolve_redirect(
    options: RequestOptions, inherited: InheritableRequest | None
) -> RedirectMode:
    """Resolve the redirect mode: option, then input request, then follow."""
    if options.redirect is not None:
        return options.redirect
    if inherited is not None:
        return inherited.redirect
    return RedirectMode.FOLLOW


def resolve_follow(
    options: RequestOptions, inherited: InheritableRequest | None
) -> int:
    """Resolve the maximum redirect hops; an explicit 0 is kept."""
    if options.follow is not None:
        return options.follow
    if inherited is not None:
        return inherited.follow
    return DEFAULT_FOLLOW


def resolve_compress(
    options: RequestOptions, inherited: InheritableRequest | None
) -> bool:
    """Resolve whether compressed responses are accepted; False is kept."""
    if options.compress is not None:
        return options.compress
    if inherited is not None:
        return inherited.compress
    return DEFAULT_COMPRESS


def resolve_counter(
    options: RequestOptions, inherited: InheritableRequest | None
) -> int:
    """Resolve the current redirect count."""
    if options.counter is not None:
        return options.counter
    if inherited is not None:
        return inherited.counter
    return DEFAULT_COUNTER


def resolve_agent(options: RequestOptions, inherited: InheritableRequest | None) -> Any:
    """Resolve the connection agent; None means no custom agent."""
    if options.agent is not None:
        return options.agent
    if inherited is not None:
        return inherited.agent
    return None


def has_body(options: RequestOptions, inherited: InheritableRequest | None) -> bool:
    """Check whether the resolved request will carry a body."""
    if options.body is not None:
        return True
    return inherited is not None and inherited.body is not None


def normalize_input(raw_input: object, options: RequestOptions) -> NormalizedInput:
    """Resolve construction input and options into canonical fields.

    Args:
        raw_input: URL string, URL-like object, or existing request.
        options: Caller options.

    Returns:
        NormalizedInput ready for request construction.

    Raises:
        InvalidBodyForMethodError: If a body is present with GET or HEAD.
        InvalidURLError: If the URL cannot be split at all.
    """
    inherited = as_inherited(raw_input)
    url = resolve_url(raw_input, inherited)
    method = resolve_method(options, inherited)

    # Checked before the inherited body is cloned
    if has_body(options, inherited) and method in BODYLESS_METHODS:
        raise InvalidBodyForMethodError(method)

    timeout = resolve_timeout(options, inherited)
    size = resolve_size(options, inherited)
    body = resolve_body(options, inherited, timeout=timeout, size=size)
    headers = resolve_headers(options, inherited)

    if body is not None and not headers.has("Content-Type"):
        content_type = body.extract_content_type()
        if content_type is not None:
            headers.set("Content-Type", content_type)

    return NormalizedInput(
        url=url,
        method=method,
        headers=headers,
        body=body,
        redirect=resolve_redirect(options, inherited),
        follow=resolve_follow(options, inherited),
        compress=resolve_compress(options, inherited),
        counter=resolve_counter(options, inherited),
        agent=resolve_agent(options, inherited),
        timeout=timeout,
        size=size,
    )
