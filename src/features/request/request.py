"""Normalized outbound HTTP request."""

from collections.abc import Mapping
from typing import Any

import structlog

from src.features.request.body import Body
from src.features.request.constants import BODYLESS_METHODS
from src.features.request.errors import RequestError
from src.features.request.headers import Headers
from src.features.request.metrics import RequestMetrics
from src.features.request.normalizer import normalize_input
from src.features.request.options import RedirectMode, RequestOptions
from src.features.request.url import ParsedURL


logger = structlog.get_logger()


class Request:
    """A normalized, read-only HTTP request.

    Built from a URL string, a URL-like object, or another Request, plus
    construction options. Everything except ``method`` is read-only once
    constructed. The request owns private copies of its headers and body.

    Example:
        >>> request = Request("http://example.com", method="post", body="hi")
        >>> request.method
        'POST'
        >>> request.url
        'http://example.com/'
    """

    def __init__(
        self,
        raw_input: "Request | str | Any",
        options: RequestOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize the request.

        Args:
            raw_input: URL string, URL-like object, or existing Request.
            options: Construction options, as a model or a mapping.
            **overrides: Individual options; these win over ``options``.

        Raises:
            InvalidBodyForMethodError: If a body is given with GET or HEAD.
            InvalidHeaderError: If a supplied header is malformed.
            pydantic.ValidationError: If an option has an invalid value.
        """
        metrics = RequestMetrics.get_instance()
        try:
            fields = normalize_input(raw_input, _coerce_options(options, overrides))
        except RequestError as e:
            metrics.record_failure(e.error_class)
            raise

        self._url = fields.url
        self._method = fields.method
        self._headers = fields.headers
        self._body = fields.body
        self._redirect = fields.redirect
        self._follow = fields.follow
        self._compress = fields.compress
        self._counter = fields.counter
        self._agent = fields.agent
        self._timeout = fields.timeout
        self._size = fields.size
        metrics.record_construction()

    @property
    def url(self) -> str:
        """Serialized URL."""
        return self._url.href

    @property
    def parsed_url(self) -> ParsedURL:
        """URL components as parsed at construction."""
        return self._url

    @property
    def method(self) -> str:
        """Upper-case HTTP method."""
        return self._method

    @method.setter
    def method(self, value: str) -> None:
        # Upper-cases only; the GET/HEAD body rule is enforced at construction
        method = value.upper()
        if self._body is not None and method in BODYLESS_METHODS:
            logger.warning(
                "method_conflicts_with_body",
                method=method,
                url=self.url,
            )
        self._method = method

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def body(self) -> Body | None:
        return self._body

    @property
    def redirect(self) -> RedirectMode:
        return self._redirect

    @property
    def follow(self) -> int:
        return self._follow

    @property
    def compress(self) -> bool:
        return self._compress

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def agent(self) -> Any:
        return self._agent

    @property
    def timeout(self) -> int:
        return self._timeout

    @property
    def size(self) -> int:
        return self._size

    def clone(self) -> "Request":
        """Create an independent copy of this request.

        The copy gets fresh headers and a body that can be read
        independently of this request's body.

        Raises:
            BodyAlreadyUsedError: If this request's body was already read.
        """
        duplicate = Request(self)
        RequestMetrics.get_instance().record_clone()
        return duplicate

    def __repr__(self) -> str:
        return f"<Request {self._method} {self.url}>"


def _coerce_options(
    options: RequestOptions | Mapping[str, Any] | None,
    overrides: dict[str, Any],
) -> RequestOptions:
    """Merge options and keyword overrides into one validated model.

    Args:
        options: Options model or mapping, if any.
        overrides: Keyword options that take precedence. None means unset.

    Returns:
        Validated RequestOptions.
    """
    overrides = {name: value for name, value in overrides.items() if value is not None}
    if options is None:
        return RequestOptions(**overrides)
    if isinstance(options, RequestOptions):
        if not overrides:
            return options
        base = {name: getattr(options, name) for name in options.model_fields_set}
    else:
        base = dict(options)
    return RequestOptions(**{**base, **overrides})
