"""Lifecycle of the shared remote client.

Lifecycle:
    uninitialized -> (first dispatch) constructed with defaults -> active (reused)
    -> torn down (error callback detached, then client closed) on shutdown

Construction happens at most once, even under concurrent first use.

Dispatch writes the active logger name onto the shared client and then
captures. The two steps are not atomic across threads: two concurrent
dispatches may interleave so that an event is reported under the other
call's logger name. Capture is not locked.
"""

from __future__ import annotations

__all__ = [
    "ClientManager",
    "default_client_factory",
]

import threading
from datetime import timedelta

from sentry_logging.client.http_client import HttpClient
from sentry_logging.client.protocol import ClientFactory, ErrorCallback, SentryClient
from sentry_logging.config import SentryTargetConfig
from sentry_logging.constants import DEFAULT_ENVIRONMENT, DEFAULT_TIMEOUT_SECONDS
from sentry_logging.models.remote_event import RemoteEvent


def default_client_factory(config: SentryTargetConfig) -> SentryClient:
    """Build the default HttpClient from configuration."""
    return HttpClient(
        config.dsn,
        timeout=config.timeout,
        environment=config.environment,
        release=config.release,
    )


class ClientManager:
    """Owns the single client instance used by a handler.

    Args:
        config: Handler configuration.
        client_factory: Builds the client on first use. Defaults to HttpClient.
        error_callback: Attached to the client as error_on_capture.
    """

    def __init__(
        self,
        config: SentryTargetConfig,
        client_factory: ClientFactory | None = None,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or default_client_factory
        self._error_callback = error_callback
        self._client: SentryClient | None = None
        self._lock = threading.Lock()

    @property
    def is_client_created(self) -> bool:
        """Whether the client has been constructed."""
        return self._client is not None

    def get_client(self) -> SentryClient:
        """Return the shared client, constructing it on first call.

        Returns:
            SentryClient: The one client owned by this manager.
        """
        client = self._client
        if client is not None:
            return client

        with self._lock:
            # Another thread may have built it while we waited
            if self._client is None:
                self._client = self._build_client()
            return self._client

    def dispatch(self, event: RemoteEvent, logger_name: str | None) -> str | None:
        """Capture an event on the shared client.

        Args:
            event: Event to send.
            logger_name: Name of the logger the event came from.

        Returns:
            str | None: Whatever the client's capture returned.
        """
        client = self.get_client()
        client.logger = logger_name
        return client.capture(event)

    def shutdown(self) -> None:
        """Detach the error callback, then close the client if one was built.

        The client is closed only when it has a close() method. Safe to call
        repeatedly, before any client exists, and while dispatches are in
        flight. Failures those dispatches report after this point are dropped.
        """
        client = self._client
        if client is None:
            return
        client.error_on_capture = None

        close = getattr(client, "close", None)
        if callable(close):
            close()

    def _build_client(self) -> SentryClient:
        client = self._client_factory(self._config)
        client.error_on_capture = self._error_callback

        if client.release is None:
            client.release = self._config.release

        if not (client.environment or "").strip():
            client.environment = DEFAULT_ENVIRONMENT

        if not client.timeout:
            client.timeout = timedelta(seconds=DEFAULT_TIMEOUT_SECONDS)

        return client
