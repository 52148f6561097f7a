"""Parsed URL value stored by a request."""

from typing import Any
from urllib.parse import ParseResult, SplitResult, urlsplit, urlunsplit

import httpx
from pydantic import BaseModel, ConfigDict, Field

from src.features.request.errors import InvalidURLError


class ParsedURL(BaseModel):
    """Absolute or relative URL split into its components.

    The protocol keeps its trailing colon (``"http:"``) and the hostname is
    lower-cased. Search and hash keep their leading ``?`` and ``#`` so that
    components concatenate back into the original reference.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    protocol: str | None = Field(default=None, description="Scheme with colon")
    auth: str | None = Field(default=None, description="userinfo before @")
    hostname: str | None = Field(default=None, description="Lower-cased host")
    port: int | None = Field(default=None, ge=0, le=65535)
    pathname: str = Field(default="", description="Path component")
    search: str = Field(default="", description="Query with leading ?")
    hash: str = Field(default="", description="Fragment with leading #")

    @property
    def host(self) -> str | None:
        """Hostname with port, if any."""
        if self.hostname is None:
            return None
        hostname = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        if self.port is None:
            return hostname
        return f"{hostname}:{self.port}"

    @property
    def path(self) -> str:
        """Path plus query, as used on the request line."""
        return f"{self.pathname}{self.search}"

    @property
    def href(self) -> str:
        """Serialize back to a URL string."""
        scheme = self.protocol[:-1] if self.protocol else ""
        netloc = ""
        if self.host is not None:
            netloc = f"{self.auth}@{self.host}" if self.auth else self.host
        return urlunsplit(
            (scheme, netloc, self.pathname, self.search[1:], self.hash[1:])
        )

    def __str__(self) -> str:
        return self.href


def parse_url(value: str) -> ParsedURL:
    """Parse a URL string.

    An authority with an empty path gets ``/`` as its path.

    Args:
        value: Absolute or relative URL reference.

    Returns:
        ParsedURL with normalized components.

    Raises:
        InvalidURLError: If the reference cannot be split, e.g. a
            non-numeric or out-of-range port.
    """
    try:
        parts = urlsplit(value.strip())
        port = parts.port
    except ValueError as e:
        raise InvalidURLError(value) from e

    hostname = parts.hostname or None
    auth = None
    if "@" in parts.netloc:
        auth = parts.netloc.rsplit("@", 1)[0]

    pathname = parts.path
    if hostname is not None and not pathname:
        pathname = "/"

    return ParsedURL(
        protocol=f"{parts.scheme}:" if parts.scheme else None,
        auth=auth,
        hostname=hostname,
        port=port,
        pathname=pathname,
        search=f"?{parts.query}" if parts.query else "",
        hash=f"#{parts.fragment}" if parts.fragment else "",
    )


def url_reference(value: Any) -> str | None:
    """Get the absolute-reference string a URL-like object exposes.

    Recognizes objects with a string ``href`` attribute, ``httpx.URL``, and
    ``urllib.parse`` split/parse results.

    Args:
        value: Candidate URL-like object.

    Returns:
        The reference string, or None if the value is not URL-like.
    """
    href = getattr(value, "href", None)
    if isinstance(href, str) and href:
        return href
    if isinstance(value, httpx.URL):
        return str(value)
    if isinstance(value, SplitResult | ParseResult):
        return value.geturl()
    return None
