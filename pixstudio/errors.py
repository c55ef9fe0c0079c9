"""Exception types raised by the conversion pipeline and palette handling."""
from __future__ import annotations


class PixStudioError(Exception):
    """Base class for all pixstudio errors."""


class ParseError(PixStudioError, ValueError):
    """A color string did not match ``#RRGGBB`` / ``RRGGBB``."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid hex color: {value!r}")
        self.value = value


class ConfigurationError(PixStudioError, ValueError):
    """A generation request was configured inconsistently (e.g. k > palette size)."""


__all__ = ["PixStudioError", "ParseError", "ConfigurationError"]
