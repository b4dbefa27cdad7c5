"""Custom exceptions for Gantry."""


class GantryError(Exception):
    """Base exception for all Gantry errors."""

    pass


class MalformedDateError(GantryError, ValueError):
    """Raised when a calendar date string is not a valid YYYY-MM-DD day."""

    pass


class InvalidRangeError(GantryError, ValueError):
    """Raised when a date range ends before it starts."""

    pass


class ConfigError(GantryError):
    """Raised when configuration is invalid."""

    pass


class ParseError(GantryError):
    """Raised when a task file cannot be parsed."""

    pass
