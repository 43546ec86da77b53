"""Default client: posts events to the store endpoint over httpx.

The request body is the event's to_payload() as JSON. Retries, batching and
protocol negotiation are out of scope; a failed send is reported once through
error_on_capture and the event is lost.
"""

from __future__ import annotations

__all__ = [
    "USER_AGENT",
    "HttpClient",
]

from datetime import timedelta

import httpx

from sentry_logging import __version__
from sentry_logging.client.protocol import ErrorCallback
from sentry_logging.constants import CLIENT_NAME, TRANSPORT_ERRORS
from sentry_logging.dsn import Dsn
from sentry_logging.exceptions import TransportError
from sentry_logging.models.remote_event import RemoteEvent
from sentry_logging.telemetry.system_logger import get_system_logger

USER_AGENT = f"{CLIENT_NAME}/{__version__}"


class HttpClient:
    """Synchronous HTTP client for a single DSN.

    Usage:
        client = HttpClient(Dsn.parse("https://key@sentry.example.com/42"))
        client.error_on_capture = report_failure
        client.logger = "app.worker"
        event_id = client.capture(event)

    Args:
        dsn: Endpoint to send to.
        timeout: Per-request timeout. Zero means no timeout is applied here;
            ClientManager replaces zero with its default before first use.
        environment: Environment reported with events.
        release: Release reported with events.
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self,
        dsn: Dsn,
        *,
        timeout: timedelta = timedelta(0),
        environment: str | None = None,
        release: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.dsn = dsn
        self.timeout = timeout
        self.environment = environment
        self.release = release
        self.logger: str | None = None
        self.error_on_capture: ErrorCallback | None = None
        self._http = httpx.Client(
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    def capture(self, event: RemoteEvent) -> str | None:
        """Send one event.

        Args:
            event: Event to send.

        Returns:
            str | None: Id the service assigned (or the client-side id when the
            response carries none); None if sending failed.
        """
        if self._http.is_closed:
            self._report(TransportError("client is closed"))
            return None

        payload = event.to_payload(logger=self.logger, environment=self.environment, release=self.release)
        seconds = self.timeout.total_seconds()

        try:
            response = self._http.post(
                self.dsn.store_url,
                json=payload,
                headers={"X-Sentry-Auth": self.dsn.auth_header(USER_AGENT)},
                timeout=seconds if seconds > 0 else None,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._report(
                TransportError(
                    f"{e.response.status_code} from {self.dsn.store_url}",
                    status_code=e.response.status_code,
                ),
                e,
            )
            return None
        except TRANSPORT_ERRORS as e:
            self._report(TransportError(str(e) or type(e).__name__), e)
            return None

        return self._event_id(response) or event.event_id

    def close(self) -> None:
        """Close the underlying HTTP connection pool.

        Events captured afterwards are reported as TransportError.
        """
        self._http.close()

    def _report(self, error: TransportError, cause: Exception | None = None) -> None:
        if cause is not None:
            error.__cause__ = cause
        callback = self.error_on_capture
        if callback is not None:
            callback(error)
            return
        # No callback means the handler was torn down
        get_system_logger().debug(
            {
                "event": "sentry_capture_dropped",
                "message": f"Dropped event after client shutdown: {error}",
                "error_type": type(cause or error).__name__,
            }
        )

    @staticmethod
    def _event_id(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        return body.get("id") if isinstance(body, dict) else None
