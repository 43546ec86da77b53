"""Remote client capability, its default httpx implementation, and its lifecycle.

Import directly from submodules:
    from sentry_logging.client.manager import ClientManager
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
