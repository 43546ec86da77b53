"""Translation of log events into remote error-tracking events.

Rules:
- A log event with an exception always becomes an ExceptionEvent, whose extra
  holds the verbatim stack trace under RawStackTrace.
- A log event without an exception becomes a MessageEvent, unless events
  without exceptions are ignored, in which case nothing is produced.
- Properties are copied into extra as strings; in tags mode extra is omitted
  and properties are not sent at all.
- The fingerprint is always (message template, call site, logger name) with
  None entries passed through, matching the service's own grouping.

Translation is pure and synchronous. Errors are raised, never suppressed;
the handler's isolation boundary decides what to do with them.
"""

from __future__ import annotations

__all__ = [
    "LEVEL_MAP",
    "EventTranslator",
    "Layout",
    "map_level",
]

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from sentry_logging.constants import RAW_STACK_TRACE_KEY, SERVICE_NAME_KEY
from sentry_logging.exceptions import TranslationError, UnmappedSeverityError
from sentry_logging.models.log_event import LogEvent, LogLevel
from sentry_logging.models.remote_event import (
    ErrorLevel,
    ExceptionEvent,
    Fingerprint,
    MessageEvent,
    RemoteEvent,
)

# Renders the text of a message event
Layout = Callable[[LogEvent], str]

LEVEL_MAP: Mapping[LogLevel, ErrorLevel] = MappingProxyType(
    {
        LogLevel.DEBUG: ErrorLevel.DEBUG,
        LogLevel.ERROR: ErrorLevel.ERROR,
        LogLevel.FATAL: ErrorLevel.FATAL,
        LogLevel.INFO: ErrorLevel.INFO,
        LogLevel.TRACE: ErrorLevel.DEBUG,
        LogLevel.WARN: ErrorLevel.WARNING,
    }
)


def _verify_level_map() -> None:
    """Fail at import if any LogLevel lacks a mapping."""
    for level in LogLevel:
        if level not in LEVEL_MAP:
            raise UnmappedSeverityError(level)


_verify_level_map()


def map_level(level: LogLevel) -> ErrorLevel:
    """Map a log level to the remote service's severity.

    Args:
        level: Level of the log event.

    Returns:
        ErrorLevel: Remote severity.

    Raises:
        UnmappedSeverityError: If the level is not in LEVEL_MAP.
    """
    try:
        return LEVEL_MAP[level]
    except KeyError:
        raise UnmappedSeverityError(level) from None


def _default_layout(event: LogEvent) -> str:
    return event.formatted_message


class EventTranslator:
    """Builds one RemoteEvent per LogEvent.

    Args:
        service_name: Value of the ServiceName tag on every event.
        send_properties_as_tags: Omit extra on message events.
        ignore_events_with_no_exception: Produce nothing for events without an exception.
        layout: Renders the message of message events. Defaults to the
            formatted message.
    """

    def __init__(
        self,
        service_name: str | None = None,
        *,
        send_properties_as_tags: bool = False,
        ignore_events_with_no_exception: bool = False,
        layout: Layout | None = None,
    ) -> None:
        self.service_name = service_name
        self.send_properties_as_tags = send_properties_as_tags
        self.ignore_events_with_no_exception = ignore_events_with_no_exception
        self._layout = layout or _default_layout

    def translate(self, event: LogEvent) -> RemoteEvent | None:
        """Translate a log event.

        Args:
            event: The log event.

        Returns:
            RemoteEvent | None: ExceptionEvent if the event carries an exception,
            otherwise MessageEvent, or None if such events are ignored.

        Raises:
            UnmappedSeverityError: If the level has no mapping.
            TranslationError: If a property cannot be converted to text.
        """
        if event.exception is not None:
            return ExceptionEvent(
                exception=event.exception,
                message=event.formatted_message,
                level=map_level(event.level),
                extra={RAW_STACK_TRACE_KEY: event.stack_trace},
                fingerprint=self.fingerprint(event),
                tags=self._tags(),
                timestamp=event.timestamp,
            )

        if self.ignore_events_with_no_exception:
            return None

        return MessageEvent(
            message=self._layout(event),
            level=map_level(event.level),
            extra=None if self.send_properties_as_tags else self._extras(event.properties),
            fingerprint=self.fingerprint(event),
            tags=self._tags(),
            timestamp=event.timestamp,
        )

    @staticmethod
    def fingerprint(event: LogEvent) -> Fingerprint:
        """Grouping key: (message template, call site, logger name)."""
        return (event.message, event.call_site, event.logger_name)

    def _tags(self) -> dict[str, str | None]:
        return {SERVICE_NAME_KEY: self.service_name}

    @staticmethod
    def _extras(properties: Mapping[Any, Any]) -> dict[str, str | None]:
        try:
            return {str(key): str(value) for key, value in properties.items()}
        except Exception as e:
            raise TranslationError(f"Cannot convert log event properties: {e}") from e
