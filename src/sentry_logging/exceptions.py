"""Custom exceptions for sentry-logging.

Exceptions are organized into two categories:

Configuration/Programming Defects (surface to the operator):
    - SentryConfigurationError: Base for defects the handler must not swallow
    - UnmappedSeverityError: A log level has no entry in the level map
    - InvalidEndpointError: The DSN is malformed

Delivery Failures (reported on the diagnostic logger, then dropped):
    - TranslationError: Building a remote event from a log event failed
    - TransportError: Sending a remote event failed

Usage:
    from sentry_logging.exceptions import InvalidEndpointError, TransportError
"""

from __future__ import annotations

__all__ = [
    "InvalidEndpointError",
    "SentryConfigurationError",
    "SentryLoggingError",
    "TranslationError",
    "TransportError",
    "UnmappedSeverityError",
]

from typing import Any


class SentryLoggingError(Exception):
    """Base exception for all sentry-logging errors."""


# =============================================================================
# Configuration/Programming Defects (never swallowed by the handler)
# =============================================================================


class SentryConfigurationError(SentryLoggingError):
    """Base for errors that indicate a broken setup rather than a failed send.

    The handler's isolation boundary re-raises these so that a misconfigured
    pipeline is visible to the operator instead of silently dropping events.
    """


class UnmappedSeverityError(SentryConfigurationError):
    """A log level has no counterpart in the severity map.

    Unreachable as long as the level map covers every LogLevel member. Seeing
    this means the level enum changed without updating the map.

    Attributes:
        level: The level that could not be mapped.
    """

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"No severity mapping for log level {level!r}")


class InvalidEndpointError(SentryConfigurationError):
    """The DSN could not be parsed into a usable endpoint.

    Raised while the configuration is built, before any event is dispatched.

    Attributes:
        dsn: The offending DSN value.
        reason: What was wrong with it.
    """

    def __init__(self, dsn: Any, reason: str) -> None:
        self.dsn = dsn
        self.reason = reason
        super().__init__(f"Invalid DSN {dsn!r}: {reason}")


# =============================================================================
# Delivery Failures (reported and dropped)
# =============================================================================


class TranslationError(SentryLoggingError):
    """Building a remote event from a log event failed (e.g. unprintable property)."""


class TransportError(SentryLoggingError):
    """Sending an event to the remote service failed.

    Attributes:
        status_code: HTTP status returned by the service, if one was received.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
