"""Replaceable global logger and pass-through adapters."""

from __future__ import annotations

from typing import Any, Optional

from ngebut.log.logger import EventLike, Level, LoggerLike, get_default_logger

_global_logger: Optional[LoggerLike] = None


def set_logger(logger: Optional[LoggerLike]) -> None:
    """Install *logger* as the global logger; None restores the default."""
    global _global_logger
    _global_logger = logger


def get_logger() -> LoggerLike:
    """Return the global logger, falling back to the default logger."""
    global _global_logger
    if _global_logger is None:
        _global_logger = get_default_logger()
    return _global_logger


class AdapterEvent:
    """Forwards event calls to a wrapped event."""

    def __init__(self, event: EventLike) -> None:
        self.event = event

    def err(self, error: BaseException) -> Optional[EventLike]:
        """Attach an error through the wrapped event."""
        return self.event.err(error)

    def msg(self, message: str) -> None:
        """Emit *message* through the wrapped event."""
        self.event.msg(message)

    def msgf(self, fmt: str, *args: Any) -> None:
        """Emit a formatted message through the wrapped event."""
        self.event.msgf(fmt, *args)


class AdapterLogger:
    """Forwards logger calls to a wrapped logger."""

    def __init__(self, logger: LoggerLike) -> None:
        self.logger = logger

    def debug(self) -> Optional[EventLike]:
        return self.logger.debug()

    def info(self) -> Optional[EventLike]:
        return self.logger.info()

    def warn(self) -> Optional[EventLike]:
        return self.logger.warn()

    def error(self) -> Optional[EventLike]:
        return self.logger.error()

    def fatal(self) -> Optional[EventLike]:
        return self.logger.fatal()

    @property
    def level(self) -> Level:
        """The wrapped logger's level."""
        return self.logger.level

    @level.setter
    def level(self, value: Level) -> None:
        self.logger.level = value