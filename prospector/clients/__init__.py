"""Clients for external search services.

Each client accepts its API key in ``__init__``, exposes an ``is_available``
property (True when the key is set) and uses httpx for HTTP calls.
"""

from prospector.clients.linkup import LinkupClient, LinkupError

__all__ = [
    "LinkupClient",
    "LinkupError",
]
