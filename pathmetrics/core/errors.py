"""Exception types raised by the analysis core and its collaborators."""

from __future__ import annotations


class PathMetricsError(Exception):
    """Base class for pathmetrics errors."""


class ParseError(PathMetricsError, ValueError):
    """A log line could not be turned into an entry."""

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


class UnrecognizedFormatError(ParseError):
    """The line matches neither the start nor the completion shape."""


class MalformedFieldError(ParseError):
    """The line has a known shape but a typed field failed to convert."""


class ConfigError(PathMetricsError, ValueError):
    """Exclusion configuration is missing, unreadable, or invalid."""
