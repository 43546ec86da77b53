"""Configuration for the Sentry logging handler.

The configuration is supplied once, before the first record is handled, and is
immutable afterwards.

Example usage:
    config = SentryTargetConfig(
        dsn="https://public@sentry.example.com/42",
        service_name="billing-api",
        timeout="00:00:30",
    )
"""

from __future__ import annotations

__all__ = [
    "SentryTargetConfig",
    "format_duration",
    "parse_duration",
]

import re
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sentry_logging.constants import DEFAULT_IGNORED_LOGGERS
from sentry_logging.dsn import Dsn

# =============================================================================
# Canonical Duration Format
# =============================================================================

# [-][d.]hh:mm:ss[.fffffff]
_DURATION_PATTERN = re.compile(
    r"^(?P<sign>-)?"
    r"(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d{1,7}))?$"
)


def parse_duration(value: str) -> timedelta:
    """Parse a duration in the canonical constant format.

    Format: [-][d.]hh:mm:ss[.fffffff]
    Examples: "00:00:10", "1.02:03:04", "00:00:01.5"

    Args:
        value: Duration text.

    Returns:
        timedelta: Parsed duration.

    Raises:
        ValueError: If the text does not match the format or a component is out of range.
    """
    match = _DURATION_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Duration {value!r} is not in [-][d.]hh:mm:ss[.fffffff] format")

    hours = int(match["hours"])
    minutes = int(match["minutes"])
    seconds = int(match["seconds"])
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"Duration {value!r} has an out-of-range component")

    # Fraction is in 100ns ticks, right-padded: ".5" means 500ms
    fraction = match["fraction"] or ""
    microseconds = int(fraction.ljust(7, "0")) // 10

    duration = timedelta(
        days=int(match["days"] or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=microseconds,
    )
    return -duration if match["sign"] else duration


def format_duration(value: timedelta) -> str:
    """Format a timedelta in the canonical constant format.

    Args:
        value: Duration to format.

    Returns:
        str: e.g. "00:00:10" or "1.02:03:04.5000000".
    """
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, remainder = divmod(value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.days:
        text = f"{value.days}.{text}"
    if value.microseconds:
        text = f"{text}.{value.microseconds * 10:07d}"
    return sign + text


# =============================================================================
# Handler Configuration
# =============================================================================


class SentryTargetConfig(BaseModel):
    """Settings for one Sentry logging handler.

    Attributes:
        dsn: Endpoint descriptor. A malformed DSN raises InvalidEndpointError
            while this model is being built.
        service_name: Attached to every event under the ServiceName tag.
        timeout: Bound on each send. Zero means "use the 10 second default".
            Accepts a timedelta or a "[-][d.]hh:mm:ss[.fffffff]" string.
        environment: Environment reported with events. Unset means "develop".
        release: Version identifier of the host application, if known.
        ignore_events_with_no_exception: Only send records that carry an exception.
        send_properties_as_tags: Omit the extras dictionary. Properties are NOT
            copied into tags (known limitation).
        ignored_loggers: Logger names (and their children) never forwarded.
        diagnostic_log_path: If set, swallowed failures are also appended to this
            JSONL file (WARNING and above). Applies to the shared diagnostic
            logger, so only the first configured path takes effect.
    """

    dsn: Dsn
    service_name: str | None = None
    timeout: timedelta = timedelta(0)
    environment: str | None = None
    release: str | None = None
    ignore_events_with_no_exception: bool = False
    send_properties_as_tags: bool = False
    ignored_loggers: tuple[str, ...] = Field(default=DEFAULT_IGNORED_LOGGERS)
    diagnostic_log_path: Path | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("dsn", mode="before")
    @classmethod
    def _parse_dsn(cls, value: Any) -> Dsn:
        # InvalidEndpointError is not a ValueError, so it escapes pydantic as-is
        return Dsn.parse(value)

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> Any:
        if value is None:
            return timedelta(0)
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_validator("timeout")
    @classmethod
    def _reject_negative_timeout(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("timeout must not be negative")
        return value

    @property
    def timeout_text(self) -> str:
        """Timeout in the canonical duration format."""
        return format_duration(self.timeout)
