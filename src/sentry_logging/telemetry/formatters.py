"""Formatters for the diagnostic logger's console and file output."""

from __future__ import annotations

__all__ = [
    "FailureConsoleFormatter",
    "FailureFileFormatter",
]

import json
import logging
from datetime import datetime, timezone

from sentry_logging.constants import CLIENT_NAME


def _fields(record: logging.LogRecord) -> dict[str, object]:
    if isinstance(record.msg, dict):
        return dict(record.msg)
    return {"message": record.getMessage()}


class FailureConsoleFormatter(logging.Formatter):
    """One line per failure on stderr, prefixed with the client name.

    Example: "sentry-logging ERROR: Unable to send request: 503 from ..."
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = _fields(record)
        text = fields.get("message") or fields.get("event", "")
        return f"{CLIENT_NAME} {record.levelname}: {text}"


class FailureFileFormatter(logging.Formatter):
    """One JSON object per line, for the optional diagnostic file.

    Keys: time (UTC, millisecond precision, "Z" suffix), level, logger, then
    the fields of the logged dict.
    """

    def format(self, record: logging.LogRecord) -> str:
        time = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        entry = {"time": time, "level": record.levelname, "logger": record.name, **_fields(record)}
        return json.dumps(entry, default=str)
