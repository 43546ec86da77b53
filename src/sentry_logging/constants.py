"""Constants for sentry-logging.

Fixed keys and defaults shared by the translator, client and handler.
For per-deployment settings, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CLIENT_NAME",
    # Event keys
    "RAW_STACK_TRACE_KEY",
    "SERVICE_NAME_KEY",
    # Client defaults
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_TIMEOUT_SECONDS",
    "SENTRY_PROTOCOL_VERSION",
    "PLATFORM",
    # Handler defaults
    "DEFAULT_IGNORED_LOGGERS",
    # Transport errors
    "BASE_TRANSPORT_ERRORS",
    "TRANSPORT_ERRORS",
]

# ============================================================================
# Application Identity
# ============================================================================

APP_NAME = "sentry_logging"

# Reported in the X-Sentry-Auth header and User-Agent
CLIENT_NAME = "sentry-logging"

# ============================================================================
# Event Keys
# ============================================================================

# Extra key holding the verbatim stack trace of exception events
RAW_STACK_TRACE_KEY = "RawStackTrace"

# Tag key attached to every event
SERVICE_NAME_KEY = "ServiceName"

# ============================================================================
# Client Defaults
# ============================================================================

# Applied when the client comes up without an environment
DEFAULT_ENVIRONMENT = "develop"

# Applied when the configured timeout is zero or absent
DEFAULT_TIMEOUT_SECONDS = 10

SENTRY_PROTOCOL_VERSION = 7

PLATFORM = "python"

# ============================================================================
# Handler Defaults
# ============================================================================

# Records from these loggers (and their children) are never forwarded.
# httpx logs every request at INFO, which would otherwise loop back into the
# handler that sent it.
DEFAULT_IGNORED_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", APP_NAME)

# ============================================================================
# Transport Errors
# ============================================================================

BASE_TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    BrokenPipeError,
    EOFError,
    ConnectionError,
    ConnectionResetError,
    ConnectionAbortedError,
    TimeoutError,
)


def _build_transport_errors() -> tuple[type[Exception], ...]:
    """Build complete tuple of transport error types including httpx's.

    Returns:
        Tuple of exception types that indicate transport/connection failures.
    """
    import httpx

    errors: list[type[Exception]] = list(BASE_TRANSPORT_ERRORS)
    # Base classes cover ConnectError, ReadTimeout, RemoteProtocolError, etc.
    errors.extend(
        [
            httpx.TransportError,
            httpx.HTTPStatusError,
        ]
    )
    return tuple(errors)


TRANSPORT_ERRORS: tuple[type[Exception], ...] = _build_transport_errors()
