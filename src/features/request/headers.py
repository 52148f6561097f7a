"""Case-insensitive, order-preserving, multi-value header container."""

import re
from collections.abc import Iterable, Iterator, Mapping

import httpx

from src.features.request.errors import InvalidHeaderError


# RFC 7230 token characters
HEADER_NAME_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
INVALID_VALUE_PATTERN = re.compile(r"[\r\n\x00]")
# Header bytes on the wire are ISO-8859-1
HEADER_ENCODING = "latin-1"

HeaderValue = str | int


def validate_header_name(name: str) -> str:
    """Validate a header name.

    Args:
        name: Header name to check.

    Returns:
        The name, unchanged.

    Raises:
        InvalidHeaderError: If the name is not an RFC 7230 token.
    """
    if not isinstance(name, str) or not HEADER_NAME_PATTERN.match(name):
        raise InvalidHeaderError(str(name), "not a valid HTTP token")
    return name


def validate_header_value(name: str, value: HeaderValue) -> str:
    """Validate and coerce a header value to text.

    Args:
        name: Header name, used in the error message.
        value: Header value.

    Returns:
        Value as a string.

    Raises:
        InvalidHeaderError: If the value contains CR, LF or NUL, or cannot
            be encoded as latin-1.
    """
    text = str(value)
    if INVALID_VALUE_PATTERN.search(text):
        raise InvalidHeaderError(name, "value contains a control character")
    try:
        text.encode(HEADER_ENCODING)
    except UnicodeEncodeError as exc:
        raise InvalidHeaderError(name, "value is not latin-1 encodable") from exc
    return text


class Headers:
    """Header container backed by ``httpx.Headers``.

    Names compare case-insensitively. Every value keeps its insertion order,
    and a name may carry several values. Construction always copies its
    input, so a container never shares storage with the caller's object.
    """

    def __init__(self, init: "HeadersInit | None" = None) -> None:
        """Initialize the container.

        Args:
            init: Another container, an httpx.Headers, a mapping of
                name to value (or list of values), or (name, value) pairs.
        """
        self._headers = httpx.Headers(
            list(_iter_init(init)), encoding=HEADER_ENCODING
        )

    def has(self, name: str) -> bool:
        """Check whether a header is present."""
        return validate_header_name(name).lower() in self._headers

    def get(self, name: str) -> str | None:
        """Get a header value, joining repeated values with a comma.

        Args:
            name: Header name (any case).

        Returns:
            Combined value, or None if absent.
        """
        values = self.get_all(name)
        if not values:
            return None
        return ",".join(values)

    def get_all(self, name: str) -> list[str]:
        """Get every value for a header, in insertion order."""
        return self._headers.get_list(validate_header_name(name))

    def set(self, name: str, value: HeaderValue) -> None:
        """Set a header, replacing any existing values."""
        name = validate_header_name(name)
        self._headers[name] = validate_header_value(name, value)

    def append(self, name: str, value: HeaderValue) -> None:
        """Add a value for a header, keeping existing values."""
        name = validate_header_name(name)
        text = validate_header_value(name, value)
        self._headers = httpx.Headers(
            [*self._pairs(), (name, text)], encoding=HEADER_ENCODING
        )

    def delete(self, name: str) -> None:
        """Remove a header and all its values. Missing names are ignored."""
        name = validate_header_name(name)
        if name.lower() in self._headers:
            del self._headers[name]

    def items(self) -> list[tuple[str, str]]:
        """Get (lower-cased name, value) pairs in insertion order."""
        return self._headers.multi_items()

    def raw(self) -> dict[str, list[str]]:
        """Serialize to wire form.

        Returns:
            Lower-cased name mapped to its list of values, in insertion order.
        """
        result: dict[str, list[str]] = {}
        for name, value in self._headers.multi_items():
            result.setdefault(name, []).append(value)
        return result

    def copy(self) -> "Headers":
        """Return an independent copy of this container."""
        return Headers(self)

    def to_httpx(self) -> httpx.Headers:
        """Return a fresh httpx.Headers with the same contents."""
        return httpx.Headers(self._pairs(), encoding=HEADER_ENCODING)

    def _pairs(self) -> list[tuple[str, str]]:
        """Get (name, value) pairs with original name casing."""
        encoding = self._headers.encoding
        return [
            (key.decode(encoding), value.decode(encoding))
            for key, value in self._headers.raw
        ]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self.raw())

    def __len__(self) -> int:
        return len(self.raw())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self.raw() == other.raw()

    def __repr__(self) -> str:
        return f"Headers({self.raw()!r})"


HeadersInit = (
    Headers
    | httpx.Headers
    | Mapping[str, HeaderValue | list[HeaderValue]]
    | Iterable[tuple[str, HeaderValue]]
)


def _iter_init(init: HeadersInit | None) -> Iterator[tuple[str, str]]:
    """Flatten any supported init value into validated (name, value) pairs.

    Args:
        init: Value passed to the Headers constructor.

    Yields:
        Validated (name, value) pairs.
    """
    if init is None:
        return
    if isinstance(init, Headers):
        yield from init._pairs()
        return
    if isinstance(init, httpx.Headers):
        encoding = init.encoding
        pairs: Iterable[tuple[str, HeaderValue | list[HeaderValue]]] = [
            (key.decode(encoding), value.decode(encoding)) for key, value in init.raw
        ]
    elif isinstance(init, Mapping):
        pairs = init.items()
    else:
        pairs = init

    for name, value in pairs:
        name = validate_header_name(name)
        values = value if isinstance(value, list) else [value]
        for item in values:
            yield name, validate_header_value(name, item)
