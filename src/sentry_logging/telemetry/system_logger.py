"""Diagnostic side-channel for the Sentry handler.

Failures the handler swallows are written here so they stay visible without
ever reaching the application's own logging path. This covers translation
errors, transport errors, and errors the client reports asynchronously.

Logging strategy:
- Console (stderr): INFO and above
- File (optional, JSONL): WARNING and above, added via configure_system_logger_file()
  or the diagnostic_log_path setting

The logger does not propagate. A handler attached to the root logger would
otherwise receive its own failure reports and try to send them.
"""

from __future__ import annotations

__all__ = [
    "SYSTEM_LOGGER_NAME",
    "configure_system_logger_file",
    "get_system_logger",
    "log_send_failure",
]

import logging
import sys
from pathlib import Path

from sentry_logging.constants import APP_NAME
from sentry_logging.exceptions import TransportError
from sentry_logging.telemetry.formatters import FailureConsoleFormatter, FailureFileFormatter

SYSTEM_LOGGER_NAME = f"{APP_NAME}.internal"

# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Get the singleton diagnostic logger.

    Creates the logger on first call with a stderr handler only.

    Returns:
        logging.Logger: Configured diagnostic logger.
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(SYSTEM_LOGGER_NAME)
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False

    # Handlers left over from an earlier configuration would duplicate output
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(FailureConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def configure_system_logger_file(log_path: Path | str) -> None:
    """Also write WARNING and above to a JSONL file.

    Only the first call has an effect; the file is shared by every handler
    in the process.

    Args:
        log_path: Path to the diagnostic log file. Missing parent directories
            are created.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    log_path = Path(log_path)
    logger = get_system_logger()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(FailureFileFormatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True


def log_send_failure(exc: BaseException, logger: logging.Logger | None = None) -> None:
    """Report a swallowed failure.

    The entry names the failure's type and, when present, the type of the
    exception that caused it and the HTTP status the service returned.

    Args:
        exc: The failure.
        logger: Destination (defaults to the diagnostic logger).
    """
    entry: dict[str, object] = {
        "event": "sentry_send_failed",
        "message": f"Unable to send request: {exc}",
        "error_type": type(exc).__name__,
    }
    if exc.__cause__ is not None:
        entry["cause_type"] = type(exc.__cause__).__name__
    if isinstance(exc, TransportError) and exc.status_code is not None:
        entry["status_code"] = exc.status_code

    (logger or get_system_logger()).error(entry)
