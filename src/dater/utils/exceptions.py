"""Custom exceptions for the dater library."""


class DaterError(Exception):
    """Base exception for dater errors."""


class TimezoneError(DaterError):
    """Raised when a timezone identifier cannot be resolved."""


class DateParseError(DaterError):
    """Raised when a value cannot be parsed into a point in time."""


class DateFormatError(DaterError):
    """Raised when rendering a point in time with a pattern fails."""


class ConfigurationError(DaterError):
    """Raised when configuration is invalid."""
