"""Leveled logger that writes ``timestamp | LEVEL | message`` records."""

from __future__ import annotations

import re
import sys
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Optional, Protocol, Sequence, TextIO

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
SEPARATOR = " | "

_SPEC = re.compile(r"%(.)", re.DOTALL)


class Level(IntEnum):
    """Severity of a log record; unknown values render as ``LEVEL(n)``."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    @classmethod
    def _missing_(cls, value: object) -> Optional["Level"]:
        if isinstance(value, int) and not isinstance(value, bool):
            pseudo = int.__new__(cls, value)
            pseudo._name_ = f"LEVEL({value})"
            pseudo._value_ = value
            return pseudo
        return None

    def __str__(self) -> str:
        return self._name_


class EventLike(Protocol):
    """A pending log record that can carry an error and be emitted."""

    def err(self, error: BaseException) -> Optional["EventLike"]: ...

    def msg(self, message: str) -> None: ...

    def msgf(self, fmt: str, *args: Any) -> None: ...


class LoggerLike(Protocol):
    """Anything that hands out events per level and has a threshold level."""

    level: Level

    def debug(self) -> Optional[EventLike]: ...

    def info(self) -> Optional[EventLike]: ...

    def warn(self) -> Optional[EventLike]: ...

    def error(self) -> Optional[EventLike]: ...

    def fatal(self) -> Optional[EventLike]: ...


@dataclass
class LoggerConfig:
    """Settings for :func:`new_with_config`."""

    writer: Optional[TextIO] = None
    level: Level = Level.INFO
    time_format: str = DEFAULT_TIME_FORMAT
    no_color: bool = False


def default_logger_config() -> LoggerConfig:
    """Return the default logger configuration."""
    return LoggerConfig()


def format_timestamp(moment: datetime) -> str:
    """Render a moment as ``YYYY-MM-DD HH:MM:SS``."""
    return moment.strftime(DEFAULT_TIME_FORMAT)


def _sprint(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_message(fmt: str, args: Sequence[Any]) -> str:
    """Expand ``%s``, ``%d`` and ``%v`` in *fmt* with *args*.

    Other specifiers are kept verbatim, as is any specifier left without
    an argument.
    """
    values = list(args)
    position = [0]

    def expand(match: re.Match[str]) -> str:
        if position[0] >= len(values):
            return match.group(0)
        spec = match.group(1)
        if spec not in ("s", "d", "v"):
            # Unknown specifier: keep it and leave the argument for the next one.
            return match.group(0)
        value = values[position[0]]
        position[0] += 1
        if spec == "s":
            return value if isinstance(value, str) else _sprint(value)
        if spec == "d":
            if isinstance(value, int) and not isinstance(value, bool):
                return str(value)
            return _sprint(value)
        return _sprint(value)

    return _SPEC.sub(expand, fmt)


class Event:
    """A log record at one level; does nothing when it has no logger."""

    def __init__(self, logger: Optional["Logger"], level: Level) -> None:
        self.logger = logger
        self.level = level
        self.error: Optional[BaseException] = None

    def err(self, error: BaseException) -> "Event":
        """Attach an error to the record."""
        self.error = error
        return self

    def msg(self, message: str) -> None:
        """Write the record with *message*."""
        if self.logger is not None:
            self.logger._emit(self.level, message)

    def msgf(self, fmt: str, *args: Any) -> None:
        """Write the record with *fmt* expanded by :func:`format_message`."""
        if self.logger is not None:
            self.logger._emit(self.level, format_message(fmt, args))


class Logger:
    """Writes records at or above its level to a text writer."""

    def __init__(self, writer: Optional[TextIO] = None, level: Level = Level.INFO) -> None:
        self.writer: TextIO = writer if writer is not None else sys.stdout
        self.level = Level(level)
        self.time_format = DEFAULT_TIME_FORMAT
        self.no_color = False
        self._lock = threading.Lock()

    def _event(self, level: Level) -> Optional[Event]:
        if self.level > level:
            return None
        return Event(self, level)

    def debug(self) -> Optional[Event]:
        """Return a debug event, or None when filtered out."""
        return self._event(Level.DEBUG)

    def info(self) -> Optional[Event]:
        """Return an info event, or None when filtered out."""
        return self._event(Level.INFO)

    def warn(self) -> Optional[Event]:
        """Return a warn event, or None when filtered out."""
        return self._event(Level.WARN)

    def error(self) -> Optional[Event]:
        """Return an error event, or None when filtered out."""
        return self._event(Level.ERROR)

    def fatal(self) -> Event:
        """Return a fatal event; never filtered."""
        return Event(self, Level.FATAL)

    def _emit(self, level: Level, text: str) -> None:
        line = f"{format_timestamp(datetime.now())}{SEPARATOR}{level}{SEPARATOR}{text}"
        with self._lock:
            self.writer.write(line)


def new_with_config(config: LoggerConfig) -> Logger:
    """Create a logger from a :class:`LoggerConfig`."""
    logger = Logger(config.writer, config.level)
    logger.time_format = config.time_format
    logger.no_color = config.no_color
    return logger


_default_logger = Logger(sys.stdout, Level.INFO)


def get_default_logger() -> Logger:
    """Return the process-wide default logger."""
    return _default_logger


def _or_disabled(event: Optional[Event], level: Level) -> Event:
    return event if event is not None else Event(None, level)


def debug() -> Event:
    """Debug event from the default logger (inert when filtered)."""
    return _or_disabled(_default_logger.debug(), Level.DEBUG)


def info() -> Event:
    """Info event from the default logger (inert when filtered)."""
    return _or_disabled(_default_logger.info(), Level.INFO)


def warn() -> Event:
    """Warn event from the default logger (inert when filtered)."""
    return _or_disabled(_default_logger.warn(), Level.WARN)


def error() -> Event:
    """Error event from the default logger (inert when filtered)."""
    return _or_disabled(_default_logger.error(), Level.ERROR)


def fatal() -> Event:
    """Fatal event from the default logger."""
    return _default_logger.fatal()


def set_level(level: Level) -> None:
    """Set the default logger's level."""
    _default_logger.level = Level(level)


def set_output(writer: TextIO) -> None:
    """Set the default logger's writer."""
    _default_logger.writer = writer