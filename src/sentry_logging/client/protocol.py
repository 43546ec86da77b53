"""Client capability the manager drives.

Any object with these attributes and a capture() method can stand in for the
default HttpClient, which is how tests and alternative transports plug in.
"""

from __future__ import annotations

__all__ = [
    "ClientFactory",
    "ErrorCallback",
    "SentryClient",
]

from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sentry_logging.config import SentryTargetConfig

if TYPE_CHECKING:
    from sentry_logging.models.remote_event import RemoteEvent

# Receives transport failures the client reports asynchronously
ErrorCallback = Callable[[Exception], None]


@runtime_checkable
class SentryClient(Protocol):
    """Submits remote events.

    Attributes:
        logger: Active logger name, reported with the next captured event.
        environment: Environment reported with events.
        release: Release reported with events.
        timeout: Bound on each submit call.
        error_on_capture: Called with transport failures instead of raising.
            None means failures are dropped.

    A client may also define close(); ClientManager.shutdown calls it after
    detaching error_on_capture.
    """

    logger: str | None
    environment: str | None
    release: str | None
    timeout: timedelta
    error_on_capture: ErrorCallback | None

    def capture(self, event: RemoteEvent) -> str | None:
        """Submit one event.

        Returns:
            str | None: Id assigned to the event, or None if it was not accepted.
        """
        ...


ClientFactory = Callable[[SentryTargetConfig], SentryClient]
