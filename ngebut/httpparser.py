"""HTTP/1.1 request parsing and a codec that pairs it with response writing."""

from __future__ import annotations

import io
import re
from typing import Any, List, Optional, Tuple, Union

from ngebut.httpresponse import Header, build_response

_DOUBLE_CRLF = b"\r\n\r\n"
_LAST_CHUNK = b"0\r\n\r\n"
_DECIMAL = re.compile(rb"[+-]?[0-9]+")
_HEX = re.compile(rb"[+-]?[0-9a-fA-F]+")
_CONTENT_LENGTH_LIMIT = 1 << 30
_CHUNK_SIZE_LIMIT = 1 << 31


class ParseError(ValueError):
    """Raised when request data is not a valid HTTP request."""


class IncompleteBodyError(ParseError):
    """Raised when fewer body bytes arrived than Content-Length announces."""


class InvalidChunkError(ParseError):
    """Raised when a chunked body is malformed."""


class HTTPParser:
    """Parses a request line and headers, recording what it found."""

    def __init__(self) -> None:
        self.method: bytes = b""
        self.path: bytes = b""
        self.version: bytes = b""
        self.headers: List[Tuple[bytes, bytes]] = []

    def parse(self, data: bytes) -> int:
        """Parse the head of *data* and return the offset where the body starts.

        Raises :class:`ParseError` when the head is incomplete or malformed.
        """
        data = bytes(data)
        self.method = self.path = self.version = b""
        self.headers = []

        end = data.find(_DOUBLE_CRLF)
        if end == -1:
            raise ParseError("incomplete request head")
        request_line, *header_lines = data[:end].split(b"\r\n")

        parts = request_line.split(b" ")
        if len(parts) != 3 or not all(parts) or not parts[2].startswith(b"HTTP/"):
            raise ParseError("invalid request line")
        method, path, version = parts

        headers = []
        for line in header_lines:
            name, colon, value = line.partition(b":")
            if not colon or not name or name != name.strip():
                raise ParseError("invalid header line")
            headers.append((name, value.strip(b" \t")))

        self.method, self.path, self.version = method, path, version
        self.headers = headers
        return end + len(_DOUBLE_CRLF)

    def find_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        """Return the value of the first header called *name* (any case), or None."""
        wanted = (name.encode("latin-1") if isinstance(name, str) else bytes(name)).lower()
        for header_name, value in self.headers:
            if header_name.lower() == wanted:
                return value
        return None


class BodyReader:
    """Readable view of a request body; closing rewinds it to the start."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytes(data)
        self._stream = io.BytesIO(self._data)

    def read(self, size: int = -1) -> bytes:
        """Read up to *size* bytes, or everything left when *size* is negative."""
        return self._stream.read(size)

    def close(self) -> None:
        """Rewind to the beginning of the body."""
        self._stream.seek(0)

    def reset(self, data: bytes) -> None:
        """Replace the body with *data*, positioned at its start."""
        self._data = bytes(data)
        self._stream = io.BytesIO(self._data)

    def __enter__(self) -> "BodyReader":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def parse_chunked_body(data: bytes) -> bytes:
    """Decode chunked body *data*, up to and excluding the terminating chunk.

    Chunk extensions after ``;`` are ignored; a zero-size chunk ends the
    body. Raises :class:`InvalidChunkError` on malformed input.
    """
    data = bytes(data)
    parts = []
    pos = 0
    while pos < len(data):
        line_end = data.find(b"\n", pos)
        if line_end == -1:
            raise InvalidChunkError("missing chunk size line")
        line = data[pos:line_end]
        if line.endswith(b"\r"):
            line = line[:-1]
        size_text = line.split(b";", 1)[0]
        if not _HEX.fullmatch(size_text):
            raise InvalidChunkError("invalid chunk size")
        size = int(size_text, 16)
        if size < 0 or size >= _CHUNK_SIZE_LIMIT:
            raise InvalidChunkError("invalid chunk size")
        pos = line_end + 1
        if size == 0:
            break
        chunk_end = pos + size
        if chunk_end > len(data) or data[chunk_end:chunk_end + 2] != b"\r\n":
            raise InvalidChunkError("truncated chunk")
        parts.append(data[pos:chunk_end])
        pos = chunk_end + 2
    return b"".join(parts)


class Codec:
    """Parses requests and serialises responses for one connection."""

    def __init__(self, router: Any = None) -> None:
        self.parser = HTTPParser()
        self.content_length = -1
        self.buf: Optional[bytearray] = bytearray()
        self.router = router

    def parse(self, data: bytes) -> Tuple[int, Optional[bytes]]:
        """Parse one request from *data*.

        Returns the number of bytes consumed and the body (None when the
        request has none). Raises :class:`IncompleteBodyError` when the
        announced body has not fully arrived, and :class:`ParseError` or
        :class:`InvalidChunkError` for malformed input.
        """
        data = bytes(data)
        body_offset = self.parser.parse(data)

        if data[body_offset:body_offset + 4] == _DOUBLE_CRLF:
            return body_offset + 4, None

        content_length = self.get_content_length()
        if content_length > -1:
            body_end = body_offset + content_length
            if len(data) >= body_end:
                return body_end, data[body_offset:body_end]
            raise IncompleteBodyError("incomplete body")

        last_chunk = data.find(_LAST_CHUNK, body_offset)
        if last_chunk != -1:
            body_end = last_chunk + len(_LAST_CHUNK)
            return body_end, parse_chunked_body(data[body_offset:last_chunk])

        head_end = data.find(_DOUBLE_CRLF)
        if head_end != -1:
            return head_end + len(_DOUBLE_CRLF), None
        raise ParseError("invalid http request")

    def get_content_length(self) -> int:
        """Return the Content-Length of the parsed request, or -1 if absent or invalid.

        The value is remembered until :meth:`reset_parser` is called.
        """
        if self.content_length != -1:
            return self.content_length
        value = self.parser.find_header("Content-Length")
        length = -1
        if value is not None and _DECIMAL.fullmatch(value):
            number = int(value)
            if -_CONTENT_LENGTH_LIMIT <= number < _CONTENT_LENGTH_LIMIT:
                length = number
        self.content_length = length
        return length

    def reset_parser(self) -> None:
        """Start over with a fresh parser and no remembered Content-Length."""
        self.content_length = -1
        self.parser = HTTPParser()

    def reset(self) -> None:
        """Reset the parser and drop the response buffer."""
        self.reset_parser()
        self.buf = None

    def write_response(self, status_code: int, header: Optional[Header], body: bytes) -> None:
        """Serialise a response into :attr:`buf`, replacing its contents."""
        if self.buf is None:
            self.buf = bytearray()
        else:
            self.buf.clear()
        self.buf.extend(build_response(status_code, header, body))