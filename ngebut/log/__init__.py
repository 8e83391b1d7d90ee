"""Levelled logging with console formatting, colours and a replaceable global logger."""

__all__ = ["adapter", "color", "console", "logger"]