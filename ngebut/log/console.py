"""Console writer that reformats ``timestamp | LEVEL | message`` records."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, TextIO, Union

from ngebut.log.color import (
    COLOR_BLUE,
    COLOR_BOLD,
    COLOR_CYAN,
    COLOR_GREEN,
    COLOR_RED,
    COLOR_RESET,
    COLOR_YELLOW,
)
from ngebut.log.logger import Level

RFC3339 = "RFC3339"
"""Marker time format: ISO 8601 with a numeric offset, or ``Z`` for UTC."""

_SEPARATOR = " | "
_ERROR_PREFIX = "error: "
_INPUT_TIMESTAMP_LENGTH = 19

_LEVEL_COLORS = {
    Level.DEBUG: COLOR_BLUE,
    Level.INFO: COLOR_GREEN,
    Level.WARN: COLOR_YELLOW,
    Level.ERROR: COLOR_RED,
    Level.FATAL: COLOR_RED + COLOR_BOLD,
}

_LEVELS_BY_NAME = {
    "DEBUG": Level.DEBUG,
    "INFO": Level.INFO,
    "WARN": Level.WARN,
    "ERROR": Level.ERROR,
    "FATAL": Level.FATAL,
}


class _Discard:
    """A text sink that drops everything written to it."""

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        pass


def find_separator(data: Union[str, bytes], start: int) -> int:
    """Return the index of the first ``" | "`` at or after *start*, or -1."""
    separator: Any = b" | " if isinstance(data, (bytes, bytearray)) else _SEPARATOR
    if start < 0:
        start = 0
    return data.find(separator, start)


def parse_int_from_bytes(data: Union[str, bytes]) -> int:
    """Read the decimal digits of *data* as one number, ignoring other characters."""
    text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
    number = 0
    for ch in text:
        if "0" <= ch <= "9":
            number = number * 10 + ord(ch) - ord("0")
    return number


def format_level(level: Level, no_color: bool) -> str:
    """Return the boxed, padded label for *level*, coloured unless disabled."""
    label = f"| {str(Level(level)).ljust(6)} |"
    color = _LEVEL_COLORS.get(level)
    if no_color or color is None:
        return label
    return color + label + COLOR_RESET


def _parse_timestamp(timestamp: str) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD HH:MM:SS``, normalising out-of-range fields."""
    if not (
        len(timestamp) == _INPUT_TIMESTAMP_LENGTH
        and timestamp[4] == "-"
        and timestamp[7] == "-"
        and timestamp[10] == " "
        and timestamp[13] == ":"
        and timestamp[16] == ":"
    ):
        return None
    year = parse_int_from_bytes(timestamp[0:4])
    month = parse_int_from_bytes(timestamp[5:7])
    day = parse_int_from_bytes(timestamp[8:10])
    hour = parse_int_from_bytes(timestamp[11:13])
    minute = parse_int_from_bytes(timestamp[14:16])
    second = parse_int_from_bytes(timestamp[17:19])
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        return datetime(year, month, 1) + timedelta(
            days=day - 1, hours=hour, minutes=minute, seconds=second
        )
    except (ValueError, OverflowError):
        return None


def _format_time(moment: datetime, time_format: str) -> str:
    if time_format == RFC3339:
        text = moment.astimezone().isoformat(timespec="seconds")
        if text.endswith("+00:00"):
            text = text[: -len("+00:00")] + "Z"
        return text
    return moment.strftime(time_format)


class ConsoleWriter:
    """Rewrites log records into a human-friendly, optionally coloured line."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out: Any = out if out is not None else _Discard()
        self.time_format: str = RFC3339
        self.no_color: bool = False
        self.format_level: Optional[Callable[[Level], str]] = None
        self._lock = threading.Lock()

    def _render_timestamp(self, timestamp: str) -> str:
        if self.time_format:
            moment = _parse_timestamp(timestamp)
            if moment is not None:
                try:
                    timestamp = _format_time(moment, self.time_format)
                except (ValueError, OverflowError):
                    pass
        if not self.no_color:
            timestamp = COLOR_CYAN + timestamp + COLOR_RESET
        return timestamp

    def _render_level(self, level: str) -> str:
        if self.format_level is None:
            return level
        # Unrecognised names fall back to the lowest level.
        return self.format_level(_LEVELS_BY_NAME.get(level, Level.DEBUG))

    def _render_message(self, data: str, start: int) -> str:
        message = data[start:]
        if self.no_color or not message.startswith(_ERROR_PREFIX):
            return message
        next_sep = find_separator(data, start)
        if next_sep == -1:
            return COLOR_RED + message + COLOR_RESET
        head = COLOR_RED + data[start:next_sep] + COLOR_RESET
        return head + " " + data[next_sep + len(_SEPARATOR):]

    def write(self, data: str) -> Any:
        """Reformat one record and write it; unparseable input passes through."""
        with self._lock:
            first_sep = find_separator(data, 0)
            if first_sep == -1:
                return self.out.write(data)
            second_sep = find_separator(data, first_sep + len(_SEPARATOR))
            if second_sep == -1:
                return self.out.write(data)

            timestamp = self._render_timestamp(data[:first_sep])
            level = self._render_level(data[first_sep + len(_SEPARATOR):second_sep])
            message = self._render_message(data, second_sep + len(_SEPARATOR))
            return self.out.write(f"{timestamp} {level} {message}\n")

    def flush(self) -> None:
        """Flush the underlying output when it supports it."""
        flush = getattr(self.out, "flush", None)
        if flush is not None:
            flush()


def default_console_writer() -> ConsoleWriter:
    """Return a console writer that renders levels as boxed labels."""
    writer = ConsoleWriter(None)
    writer.format_level = lambda level: format_level(level, writer.no_color)
    return writer