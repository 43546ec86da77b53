"""Pydantic models for events sent to the remote error-tracking service.

Every LogEvent becomes exactly one of two shapes:
- MessageEvent: no exception; the message is the layout-rendered text.
- ExceptionEvent: carries the exception; extra holds the raw stack trace.

Instances are built fresh for each log event and never reused.
"""

from __future__ import annotations

__all__ = [
    "ErrorLevel",
    "ExceptionEvent",
    "Fingerprint",
    "MessageEvent",
    "RemoteEvent",
]

import traceback
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from sentry_logging.constants import PLATFORM

# (message template, call site, logger name); None entries are kept as-is
Fingerprint = tuple[Optional[str], Optional[str], Optional[str]]


class ErrorLevel(str, Enum):
    """Severity understood by the remote service."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class RemoteEvent(BaseModel):
    """Fields shared by message and exception events.

    Attributes:
        event_id: Client-generated id (uuid4 hex).
        timestamp: When the log event happened (UTC).
        level: Mapped severity.
        message: Text shown for the event.
        extra: Free-form diagnostic payload, or None when omitted.
        fingerprint: Grouping key used by the service to deduplicate events.
        tags: Indexed key/value pairs; always carries the service name.
    """

    event_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    level: ErrorLevel
    message: str
    extra: Optional[dict[str, Optional[str]]] = None
    fingerprint: Fingerprint
    tags: dict[str, Optional[str]] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def kind(self) -> Literal["message", "exception"]:
        return "message"

    def to_payload(
        self,
        *,
        logger: str | None = None,
        environment: str | None = None,
        release: str | None = None,
    ) -> dict[str, Any]:
        """Serialize to a JSON-ready request body.

        Args:
            logger: Active logger name of the sending client.
            environment: Environment the client reports.
            release: Release the client reports.

        Returns:
            dict: Body for the store endpoint. None values are dropped at the
            top level; fingerprint entries keep their None.
        """
        payload: dict[str, Any] = {
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "platform": PLATFORM,
            "logger": logger,
            "environment": environment,
            "release": release,
            "message": {"formatted": self.message},
            "extra": self.extra,
            "fingerprint": list(self.fingerprint),
            "tags": self.tags,
        }
        return {key: value for key, value in payload.items() if value is not None}


class MessageEvent(RemoteEvent):
    """Event for a log record without an exception."""


class ExceptionEvent(RemoteEvent):
    """Event for a log record that carries an exception."""

    exception: BaseException

    @property
    def kind(self) -> Literal["message", "exception"]:
        return "exception"

    def to_payload(
        self,
        *,
        logger: str | None = None,
        environment: str | None = None,
        release: str | None = None,
    ) -> dict[str, Any]:
        payload = super().to_payload(logger=logger, environment=environment, release=release)
        exc = self.exception
        payload["exception"] = {
            "values": [
                {
                    "type": type(exc).__name__,
                    "module": type(exc).__module__,
                    "value": str(exc),
                    "stacktrace": {
                        "frames": [
                            {
                                "filename": frame.filename,
                                "function": frame.name,
                                "lineno": frame.lineno,
                                "context_line": frame.line,
                            }
                            for frame in traceback.extract_tb(exc.__traceback__)
                        ]
                    },
                }
            ]
        }
        return payload
