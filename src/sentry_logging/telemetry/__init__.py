"""Diagnostic logging for failures the handler swallows."""

from sentry_logging.telemetry.formatters import FailureConsoleFormatter, FailureFileFormatter
from sentry_logging.telemetry.system_logger import (
    SYSTEM_LOGGER_NAME,
    configure_system_logger_file,
    get_system_logger,
    log_send_failure,
)

__all__ = [
    "SYSTEM_LOGGER_NAME",
    "FailureConsoleFormatter",
    "FailureFileFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "log_send_failure",
]
