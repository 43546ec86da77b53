"""Shared fixtures for sentry-logging tests."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Any
from unittest.mock import MagicMock

import pytest

from sentry_logging.config import SentryTargetConfig
from sentry_logging.models.log_event import LogEvent, LogLevel
from sentry_logging.models.remote_event import RemoteEvent

TEST_DSN = "https://public@sentry.example.com/42"


# ============================================================================
# Minimal Client Double (implements the SentryClient protocol)
# ============================================================================


class FakeClient:
    """Records captured events and the logger name active at capture time."""

    def __init__(
        self,
        *,
        timeout: timedelta = timedelta(0),
        environment: str | None = None,
        release: str | None = None,
        fail_with: Exception | None = None,
    ) -> None:
        self.logger: str | None = None
        self.environment = environment
        self.release = release
        self.timeout = timeout
        self.error_on_capture: Any = None
        self.fail_with = fail_with
        self.captured: list[tuple[RemoteEvent, str | None]] = []
        self._lock = threading.Lock()

    def capture(self, event: RemoteEvent) -> str | None:
        if self.fail_with is not None:
            raise self.fail_with
        with self._lock:
            self.captured.append((event, self.logger))
        return event.event_id

    @property
    def events(self) -> list[RemoteEvent]:
        return [event for event, _ in self.captured]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def config() -> SentryTargetConfig:
    return SentryTargetConfig(dsn=TEST_DSN, service_name="billing-api")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def system_logger() -> MagicMock:
    return MagicMock(spec=logging.Logger)


def make_event(**overrides: Any) -> LogEvent:
    """Build a LogEvent with sensible defaults."""
    fields: dict[str, Any] = {
        "level": LogLevel.INFO,
        "message": "startup",
        "formatted_message": "startup",
        "logger_name": "App.Main",
        "call_site": None,
    }
    fields.update(overrides)
    return LogEvent(**fields)
