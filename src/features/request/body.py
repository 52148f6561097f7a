"""Request payload source with length query and independent duplication."""

import copy
import itertools
from collections.abc import Iterable, Iterator, Mapping
from typing import IO, Any
from urllib.parse import urlencode

from src.features.request.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SIZE_BYTES,
    DEFAULT_TIMEOUT_MS,
    FORM_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)
from src.features.request.errors import BodyAlreadyUsedError


BodyInit = (
    str
    | bytes
    | bytearray
    | memoryview
    | Mapping[str, Any]
    | list[tuple[str, Any]]
    | tuple[tuple[str, Any], ...]
    | IO[bytes]
    | IO[str]
    | Iterable[bytes]
)


class Body:
    """Payload for an outbound request.

    Text, bytes and form fields (a mapping or a list of name/value pairs)
    are buffered at construction so their length is known. File-like
    objects and other iterables are treated as streams of unknown length
    and are only read when the body is consumed.

    A body can be consumed once. ``clone`` splits a stream so that the
    original and the duplicate can each be read exactly once, in any order.
    """

    def __init__(
        self,
        source: BodyInit | None = None,
        *,
        timeout: int = DEFAULT_TIMEOUT_MS,
        size: int = DEFAULT_SIZE_BYTES,
    ) -> None:
        """Initialize the body.

        Args:
            source: Payload, or None for an empty body.
            timeout: Read timeout in milliseconds (0 = unlimited).
            size: Maximum response size in bytes (0 = unlimited).
        """
        self.timeout = timeout
        self.size = size
        self._used = False
        self._buffer: bytes | None = None
        self._stream: Iterator[bytes] | None = None
        self._content_type: str | None = None

        if source is None:
            return
        if isinstance(source, str):
            self._buffer = source.encode("utf-8")
            self._content_type = TEXT_CONTENT_TYPE
        elif isinstance(source, bytes | bytearray | memoryview):
            self._buffer = bytes(source)
        elif isinstance(source, Mapping):
            self._buffer = urlencode(source, doseq=True).encode("utf-8")
            self._content_type = FORM_CONTENT_TYPE
        elif _is_form_pairs(source):
            self._buffer = urlencode(list(source), doseq=True).encode("utf-8")
            self._content_type = FORM_CONTENT_TYPE
        elif hasattr(source, "read"):
            self._stream = _read_chunks(source)
        elif isinstance(source, Iterable):
            self._stream = _coerce_chunks(source)
        else:
            msg = f"Unsupported body type: {type(source).__name__}"
            raise TypeError(msg)

    @property
    def body_used(self) -> bool:
        """Whether the body has been consumed."""
        return self._used

    @property
    def is_stream(self) -> bool:
        """Whether the body is a stream of unknown length."""
        return self._stream is not None

    def extract_content_type(self) -> str | None:
        """Infer a Content-Type from the payload kind.

        Returns:
            Content type for text and form payloads, None otherwise.
        """
        return self._content_type

    def get_total_bytes(self) -> int | None:
        """Get the payload length.

        Returns:
            Length in bytes, 0 for no payload, or None for streams.
        """
        if self._stream is not None:
            return None
        if self._buffer is None:
            return 0
        return len(self._buffer)

    def clone(self) -> "Body":
        """Produce an independently consumable duplicate.

        Returns:
            New Body with the same payload and limits.

        Raises:
            BodyAlreadyUsedError: If this body was already consumed.
        """
        if self._used:
            raise BodyAlreadyUsedError
        duplicate = copy.copy(self)
        if self._stream is not None:
            self._stream, duplicate._stream = itertools.tee(self._stream)
        return duplicate

    def iter_bytes(self) -> Iterator[bytes]:
        """Consume the body as an iterator of byte chunks.

        Raises:
            BodyAlreadyUsedError: If this body was already consumed.
        """
        self._mark_used()
        if self._stream is not None:
            return self._stream
        if self._buffer:
            return iter([self._buffer])
        return iter([])

    def read(self) -> bytes:
        """Consume the body and return all of its bytes."""
        return b"".join(self.iter_bytes())

    def text(self) -> str:
        """Consume the body and decode it as UTF-8."""
        return self.read().decode("utf-8")

    def _mark_used(self) -> None:
        if self._used:
            raise BodyAlreadyUsedError
        self._used = True

    def __repr__(self) -> str:
        kind = "stream" if self.is_stream else f"{self.get_total_bytes()} bytes"
        return f"Body({kind}, used={self._used})"


def _read_chunks(reader: IO[bytes] | IO[str]) -> Iterator[bytes]:
    """Read a file-like object lazily in fixed-size chunks."""
    while True:
        chunk = reader.read(DEFAULT_CHUNK_SIZE)
        if not chunk:
            return
        yield _to_bytes(chunk)


def _coerce_chunks(chunks: Iterable[bytes | str]) -> Iterator[bytes]:
    """Yield each chunk of an iterable as bytes."""
    for chunk in chunks:
        yield _to_bytes(chunk)


def _to_bytes(chunk: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


def _is_form_pairs(source: object) -> bool:
    """Check for a non-empty list or tuple of (name, value) pairs."""
    if not isinstance(source, list | tuple) or not source:
        return False
    return all(
        isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)
        for item in source
    )
