"""ANSI colour codes and coloured level labels."""

from __future__ import annotations

from ngebut.log.logger import Level

COLOR_RESET = "\033[0m"
COLOR_RED = "\033[31m"
COLOR_GREEN = "\033[32m"
COLOR_YELLOW = "\033[33m"
COLOR_BLUE = "\033[34m"
COLOR_PURPLE = "\033[35m"
COLOR_CYAN = "\033[36m"
COLOR_WHITE = "\033[37m"
COLOR_BOLD = "\033[1m"

_LABELS = {
    Level.DEBUG: "| DEBUG |",
    Level.INFO: "| INFO  |",
    Level.WARN: "| WARN  |",
    Level.ERROR: "| ERROR |",
    Level.FATAL: "| FATAL |",
}

_COLORS = {
    Level.DEBUG: COLOR_BLUE,
    Level.INFO: COLOR_GREEN,
    Level.WARN: COLOR_YELLOW,
    Level.ERROR: COLOR_RED,
    Level.FATAL: COLOR_RED + COLOR_BOLD,
}

_UNKNOWN = "| UNKN  |"


def colored_string(s: str, color: str, no_color: bool) -> str:
    """Wrap *s* in *color* unless colouring is disabled."""
    if no_color:
        return s
    return color + s + COLOR_RESET


def colored_level(level: Level, no_color: bool) -> str:
    """Return the boxed label for *level*, coloured unless disabled."""
    label = _LABELS.get(level)
    if label is None:
        return _UNKNOWN
    if no_color:
        return label
    return _COLORS[level] + label + COLOR_RESET