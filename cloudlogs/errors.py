"""Domain-specific exceptions raised by cloudlogs runtime components."""

from __future__ import annotations


class CloudLogsError(Exception):
    """Base exception for cloudlogs-specific runtime failures."""


class ArgumentParseError(CloudLogsError, ValueError):
    """Raised when a duration or interval string cannot be parsed."""


class NotFoundError(CloudLogsError):
    """Raised when an app or a channel cannot be found in the cloud."""


class NotLoggedInError(CloudLogsError):
    """Raised when no saved login exists for the requested environment."""


class ConfigurationError(CloudLogsError):
    """Raised when a saved login file is unreadable or malformed."""


class APIResponseError(CloudLogsError):
    """Raised when the cloud API returns an invalid payload."""


class LogContentError(APIResponseError):
    """Raised when a fetched log line is missing its timestamp or text."""
