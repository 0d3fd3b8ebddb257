"""Custom exceptions for alarmfeed."""


class AlarmFeedError(Exception):
    """Base exception for all alarmfeed errors."""

    pass


class ConfigError(AlarmFeedError):
    """Configuration-related errors."""

    pass


class FetchError(AlarmFeedError):
    """Raised when the podcast feed is unreachable or cannot be parsed."""

    pass


class InvalidDateError(AlarmFeedError):
    """Raised when the ``date`` query parameter is not a valid ISO 8601 value."""

    pass


class MappingError(AlarmFeedError):
    """Raised when a single feed entry cannot be mapped to a record."""

    pass
