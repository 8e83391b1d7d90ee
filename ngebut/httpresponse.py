"""HTTP/1.1 response serialisation and size estimation."""

from __future__ import annotations

import threading
import time
from email.utils import formatdate
from typing import Mapping, Optional, Sequence

Header = Mapping[str, Sequence[str]]

_STATUS_TEXT = {
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",
    103: "Early Hints",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi-Status",
    208: "Already Reported",
    226: "IM Used",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request URI Too Long",
    415: "Unsupported Media Type",
    416: "Requested Range Not Satisfiable",
    417: "Expectation Failed",
    418: "I'm a teapot",
    421: "Misdirected Request",
    422: "Unprocessable Entity",
    423: "Locked",
    424: "Failed Dependency",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    510: "Not Extended",
    511: "Network Authentication Required",
}

# Fixed parts of a response, used by the size estimate.
_STATUS_LINE_BASE = 9  # "HTTP/1.1 " + " " + "\r\n"
_DATE_HEADER_BASE = 8  # "Date: " + "\r\n"
_SERVER_HEADER = 16  # "Server: ngebut\r\n"
_CONTENT_LENGTH_BASE = 18  # "Content-Length: " + "\r\n\r\n"
_CRLF = 2
_DATE_FORMAT = 29  # "Mon, 02 Jan 2006 15:04:05 GMT"
_STATUS_CODE = 3

_ENCODING = "utf-8"


def status_text(code: int) -> str:
    """Return the reason phrase for *code*, or an empty string if unknown."""
    return _STATUS_TEXT.get(code, "")


def _content_length_digits(length: int) -> int:
    if length == 0:
        return 1
    if length < 10:
        return 1
    if length < 100:
        return 2
    if length < 1000:
        return 3
    if length < 10000:
        return 4
    return 6


def estimate_response_size(status_code: int, header: Optional[Header], body: bytes) -> int:
    """Estimate the serialised size of a response in bytes."""
    size = _STATUS_LINE_BASE + _STATUS_CODE + len(status_text(status_code))
    size += _DATE_HEADER_BASE + _DATE_FORMAT
    size += _SERVER_HEADER
    size += _CONTENT_LENGTH_BASE + _content_length_digits(len(body))
    for name, values in (header or {}).items():
        size += sum(len(name) + 2 + len(value) + _CRLF for value in values)
    return size + len(body)


_date_lock = threading.Lock()
_date_second: Optional[int] = None
_date_cached = b""


def date_header() -> bytes:
    """Return the ``Date:`` header line for the current second, CRLF included."""
    global _date_second, _date_cached
    now = int(time.time())
    with _date_lock:
        if now != _date_second:
            _date_cached = f"Date: {formatdate(now, usegmt=True)}\r\n".encode("ascii")
            _date_second = now
        return _date_cached


def build_response(status_code: int, header: Optional[Header], body: bytes) -> bytes:
    """Serialise a full HTTP/1.1 response with Date and Content-Length headers."""
    parts = [
        f"HTTP/1.1 {status_code} {status_text(status_code)}\r\n".encode(_ENCODING),
        date_header(),
    ]
    for name, values in (header or {}).items():
        parts.extend(f"{name}: {value}\r\n".encode(_ENCODING) for value in values)
    parts.append(f"Content-Length: {len(body)}\r\n\r\n".encode(_ENCODING))
    parts.append(bytes(body))
    return b"".join(parts)