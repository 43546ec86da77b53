"""Logging handler that forwards Python log records to a Sentry-compatible service.

Typical usage:
    import logging
    from sentry_logging import create_sentry_handler

    handler = create_sentry_handler(
        "https://public@sentry.example.com/42",
        service_name="billing-api",
        level=logging.WARNING,
    )
    logging.getLogger().addHandler(handler)
"""

__version__ = "0.1.0"

from sentry_logging.config import SentryTargetConfig
from sentry_logging.handler import SentryHandler, create_sentry_handler

__all__ = [
    "SentryHandler",
    "SentryTargetConfig",
    "__version__",
    "create_sentry_handler",
]
