"""DSN (data source name) parsing for the remote error-tracking service.

A DSN identifies the project and the key events are sent with:

    {scheme}://{public_key}[:{secret_key}]@{host}[:{port}]/[{path}/]{project_id}

Example:
    >>> dsn = Dsn.parse("https://abc123@sentry.example.com/42")
    >>> dsn.store_url
    'https://sentry.example.com/api/42/store/'
"""

from __future__ import annotations

__all__ = ["Dsn"]

from datetime import datetime, timezone
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from sentry_logging.constants import SENTRY_PROTOCOL_VERSION
from sentry_logging.exceptions import InvalidEndpointError

_ALLOWED_SCHEMES = ("http", "https")


class Dsn(BaseModel):
    """Parsed endpoint descriptor.

    Attributes:
        raw: The DSN exactly as configured.
        scheme: "http" or "https".
        public_key: Key sent as sentry_key.
        secret_key: Legacy secret key, if present.
        host: Hostname of the service.
        port: Explicit port, if present.
        path: Path prefix before the project id (no trailing slash).
        project_id: Project the events belong to.
    """

    raw: str
    scheme: str
    public_key: str
    secret_key: str | None = None
    host: str
    port: int | None = None
    path: str = ""
    project_id: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, value: object) -> Dsn:
        """Parse and validate a DSN string.

        Args:
            value: DSN text (an existing Dsn is returned unchanged).

        Returns:
            Dsn: The parsed descriptor.

        Raises:
            InvalidEndpointError: If the value is not a well-formed DSN.
        """
        if isinstance(value, Dsn):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidEndpointError(value, "DSN must be a non-empty string")

        text = value.strip()
        try:
            parts = urlsplit(text)
            port = parts.port
        except ValueError as e:
            raise InvalidEndpointError(value, str(e)) from e

        if parts.scheme not in _ALLOWED_SCHEMES:
            raise InvalidEndpointError(value, f"scheme must be one of {', '.join(_ALLOWED_SCHEMES)}")
        if not parts.username:
            raise InvalidEndpointError(value, "missing public key")
        if not parts.hostname:
            raise InvalidEndpointError(value, "missing host")

        path, _, project_id = parts.path.rstrip("/").rpartition("/")
        if not project_id:
            raise InvalidEndpointError(value, "missing project id")

        return cls(
            raw=text,
            scheme=parts.scheme,
            public_key=parts.username,
            secret_key=parts.password or None,
            host=parts.hostname,
            port=port,
            path=path,
            project_id=project_id,
        )

    @property
    def netloc(self) -> str:
        """Host with the explicit port, if any."""
        return f"{self.host}:{self.port}" if self.port is not None else self.host

    @property
    def store_url(self) -> str:
        """URL events are POSTed to."""
        return f"{self.scheme}://{self.netloc}{self.path}/api/{self.project_id}/store/"

    def auth_header(self, client_name: str, timestamp: datetime | None = None) -> str:
        """Build the X-Sentry-Auth header value.

        Args:
            client_name: Client identifier, e.g. "sentry-logging/0.1.0".
            timestamp: Time of the request (defaults to now, UTC).

        Returns:
            str: Header value.
        """
        ts = timestamp or datetime.now(timezone.utc)
        fields = [
            f"sentry_version={SENTRY_PROTOCOL_VERSION}",
            f"sentry_client={client_name}",
            f"sentry_timestamp={int(ts.timestamp())}",
            f"sentry_key={self.public_key}",
        ]
        if self.secret_key:
            fields.append(f"sentry_secret={self.secret_key}")
        return "Sentry " + ", ".join(fields)

    def __str__(self) -> str:
        return self.raw
