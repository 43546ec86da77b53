"""Pydantic models for log events and remote events."""

from sentry_logging.models.log_event import LogEvent, LogLevel
from sentry_logging.models.remote_event import (
    ErrorLevel,
    ExceptionEvent,
    Fingerprint,
    MessageEvent,
    RemoteEvent,
)

__all__ = [
    "ErrorLevel",
    "ExceptionEvent",
    "Fingerprint",
    "LogEvent",
    "LogLevel",
    "MessageEvent",
    "RemoteEvent",
]
