"""Immutable log event consumed by the translator.

LogEvent is the framework-neutral view of a logging.LogRecord: the level,
the unformatted template, the formatted text, the exception and its stack
description, caller-supplied properties, the logger name and the call site.
"""

from __future__ import annotations

__all__ = [
    "LogEvent",
    "LogLevel",
]

import logging
import traceback
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


class LogLevel(IntEnum):
    """Ordered severity: TRACE < DEBUG < INFO < WARN < ERROR < FATAL."""

    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL

    @classmethod
    def from_levelno(cls, levelno: int) -> LogLevel:
        """Bucket a numeric logging level into a LogLevel.

        Custom levels fall into the nearest level at or below them; anything
        below DEBUG is TRACE.

        Args:
            levelno: Numeric level from a LogRecord.

        Returns:
            LogLevel: The bucket the level belongs to.
        """
        for level in sorted(cls, reverse=True):
            if levelno >= level:
                return level
        return cls.TRACE


class LogEvent(BaseModel):
    """
    One log event as seen by the translator.

    Note: 'stack_trace' is derived from 'exception' when not supplied.
    'record' keeps the originating LogRecord so the handler's formatter can
    render the message; it is never serialized.
    """

    # --- core ---
    level: LogLevel
    message: str  # unformatted template, e.g. "disk %s full"
    formatted_message: str  # template with arguments applied
    logger_name: str

    # --- exception ---
    exception: Optional[BaseException] = None
    stack_trace: Optional[str] = None

    # --- context ---
    properties: dict[Any, Any] = Field(default_factory=dict)
    call_site: Optional[str] = None  # "module.function" of the logging call
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # --- origin ---
    record: Optional[logging.LogRecord] = Field(default=None, exclude=True, repr=False)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def _derive_stack_trace(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("exception") is not None and data.get("stack_trace") is None:
            exc = data["exception"]
            data = {**data, "stack_trace": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))}
        return data

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> LogEvent:
        """Build a LogEvent from a standard library LogRecord.

        Args:
            record: The record handed to the logging handler.

        Returns:
            LogEvent: Immutable view of the record.
        """
        exception = record.exc_info[1] if record.exc_info else None
        properties = {key: value for key, value in vars(record).items() if key not in _RESERVED_RECORD_ATTRS}
        call_site = f"{record.module}.{record.funcName}" if record.funcName else None

        return cls(
            level=LogLevel.from_levelno(record.levelno),
            message=str(record.msg),
            formatted_message=record.getMessage(),
            logger_name=record.name,
            exception=exception,
            properties=properties,
            call_site=call_site,
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
            record=record,
        )
