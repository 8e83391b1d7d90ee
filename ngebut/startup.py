"""Application logger set-up and the server start-up banner."""

from __future__ import annotations

import sys
from typing import Optional

from ngebut.log.console import default_console_writer
from ngebut.log.logger import Level, Logger, LoggerLike, set_level, set_output

_BANNER = (
    "  _   _            _           _",
    " | \\ | | __ _  ___| |__  _   _| |_ ",
    " |  \\| |/ _` |/ _ \\ '_ \\| | | | __|",
    " | |\\  | (_| |  __/ |_) | |_| | |_ ",
    " |_| \\_|\\__, |\\___|_.__/ \\__,_|\\__|",
    "        |___/",
    " ",
)

_ACCEPTED_LEVELS = (Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR)

_app_logger: Optional[Logger] = None


def init_logger(level: Level) -> Logger:
    """Create the application logger writing to stdout through a console writer.

    Levels other than debug, info, warn and error fall back to info. The
    default logger is pointed at the same console writer and level.
    """
    global _app_logger
    console = default_console_writer()
    console.out = sys.stdout
    chosen = level if level in _ACCEPTED_LEVELS else Level.INFO
    logger = Logger(console, Level(chosen))
    _app_logger = logger
    set_output(console)
    set_level(logger.level)
    return logger


def get_app_logger() -> Logger:
    """Return the application logger, creating it at info level if needed."""
    if _app_logger is None:
        return init_logger(Level.INFO)
    return _app_logger


def display_startup_message(addr: str, logger: Optional[LoggerLike] = None) -> None:
    """Log the banner, the listening address and how to stop the server."""
    target = logger if logger is not None else get_app_logger()

    def emit(text: str, *args: object) -> None:
        event = target.info()
        if event is not None:
            event.msgf(text, *args) if args else event.msg(text)

    for line in _BANNER:
        emit(line)
    emit("Server is running on %s", addr)
    emit("Press Ctrl+C to stop the server")
    emit(" ")