"""Logging handler that forwards records to a Sentry-compatible service.

SentryHandler is the single failure-isolation boundary of the package:
translation and dispatch run inside one try block, and anything that goes
wrong there is reported on the diagnostic logger and dropped. A broken
error-tracking pipeline must never crash or block the application it observes.

Only configuration and programming defects (SentryConfigurationError)
escape the boundary.

Usage with dictConfig:
    logging.config.dictConfig({
        "version": 1,
        "handlers": {
            "sentry": {
                "()": "sentry_logging.create_sentry_handler",
                "dsn": "https://public@sentry.example.com/42",
                "service_name": "billing-api",
                "level": "ERROR",
            },
        },
        "root": {"handlers": ["sentry"]},
    })
"""

from __future__ import annotations

__all__ = [
    "SentryHandler",
    "create_sentry_handler",
]

import logging
from collections.abc import Callable
from typing import Any

from sentry_logging.client.manager import ClientManager
from sentry_logging.client.protocol import ClientFactory
from sentry_logging.config import SentryTargetConfig
from sentry_logging.exceptions import SentryConfigurationError
from sentry_logging.models.log_event import LogEvent
from sentry_logging.telemetry.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    log_send_failure,
)
from sentry_logging.translator import EventTranslator


class _IgnoredLoggersFilter(logging.Filter):
    """Rejects records from the given loggers and their children."""

    def __init__(self, names: tuple[str, ...]) -> None:
        super().__init__()
        self._names = names

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        return not any(name == ignored or name.startswith(f"{ignored}.") for ignored in self._names)


class SentryHandler(logging.Handler):
    """Sends log records to a Sentry-compatible service.

    Records with an exception become exception events; other records become
    message events rendered with this handler's formatter, unless the
    configuration ignores them.

    The client is created on the first record, not at construction.

    Args:
        config: Handler configuration.
        level: Minimum level handled.
        client_factory: Builds the client (defaults to HttpClient).
        system_logger: Destination for failure reports. Defaults to the
            diagnostic logger, which also gets the file named by
            config.diagnostic_log_path.
    """

    def __init__(
        self,
        config: SentryTargetConfig,
        level: int | str = logging.NOTSET,
        *,
        client_factory: ClientFactory | None = None,
        system_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(level)
        self.config = config
        if system_logger is None:
            system_logger = get_system_logger()
            if config.diagnostic_log_path is not None:
                configure_system_logger_file(config.diagnostic_log_path)
        self._system_logger = system_logger
        self._translator = EventTranslator(
            config.service_name,
            send_properties_as_tags=config.send_properties_as_tags,
            ignore_events_with_no_exception=config.ignore_events_with_no_exception,
            layout=self._render,
        )
        self._manager = ClientManager(
            config,
            client_factory=client_factory,
            error_callback=self._report_failure,
        )
        if config.ignored_loggers:
            self.addFilter(_IgnoredLoggersFilter(config.ignored_loggers))

    @property
    def manager(self) -> ClientManager:
        return self._manager

    @property
    def translator(self) -> EventTranslator:
        return self._translator

    def handle(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        """Filter and emit without taking the handler lock.

        Concurrent records are sent concurrently, each bounded by the client timeout.
        """
        rv = self.filter(record)
        if isinstance(rv, logging.LogRecord):
            record = rv
        if rv:
            self.emit(record)
        return bool(rv)

    def emit(self, record: logging.LogRecord) -> None:
        """Translate and send a record. Never raises for delivery failures."""
        self._isolate(lambda: LogEvent.from_record(record))

    def write(self, event: LogEvent) -> None:
        """Translate and send an already-built LogEvent. Never raises for delivery failures."""
        self._isolate(lambda: event)

    def close(self) -> None:
        """Tear down the client and close the handler."""
        try:
            self._manager.shutdown()
        finally:
            super().close()

    def _isolate(self, build_event: Callable[[], LogEvent]) -> None:
        try:
            event = build_event()
            remote_event = self._translator.translate(event)
            if remote_event is None:
                return
            self._manager.dispatch(remote_event, event.logger_name)
        except SentryConfigurationError:
            raise
        except Exception as e:
            self._report_failure(e)

    def _report_failure(self, exc: Exception) -> None:
        log_send_failure(exc, self._system_logger)

    def _render(self, event: LogEvent) -> str:
        if event.record is None:
            return event.formatted_message
        return self.format(event.record)


def create_sentry_handler(
    dsn: str,
    *,
    level: int | str = logging.NOTSET,
    client_factory: ClientFactory | None = None,
    **options: Any,
) -> SentryHandler:
    """Build a configured SentryHandler.

    Suitable as a dictConfig "()" factory.

    Args:
        dsn: Endpoint descriptor.
        level: Minimum level handled.
        client_factory: Builds the client (defaults to HttpClient).
        **options: Remaining SentryTargetConfig fields (service_name, timeout, ...).

    Returns:
        SentryHandler: The handler.

    Raises:
        InvalidEndpointError: If the DSN is malformed.
        pydantic.ValidationError: If another option is invalid.
    """
    config = SentryTargetConfig(dsn=dsn, **options)
    return SentryHandler(config, level, client_factory=client_factory)
