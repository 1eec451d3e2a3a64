from __future__ import annotations


class EnigmaError(Exception):
    """Base class for every error raised by the simulator."""


class ConfigError(EnigmaError, ValueError):
    """Bad machine description or per-message setup."""


class RangeError(EnigmaError, IndexError):
    """Signal index outside 0..alphabet size - 1."""


class NotFoundError(EnigmaError, LookupError):
    """Symbol is not part of the alphabet."""
