"""
Service interfaces for dependency injection.

Provides Protocol definitions so the cache layer can depend on a transport
without importing the requests-based implementation. Tests satisfy these
protocols with small fakes that serve fixture bytes.

Usage:
    from core.interfaces import ITransport

    class DatasetLoader:
        def __init__(self, store: CacheStore, transport: ITransport):
            ...
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ITransport(Protocol):
    """Interface for fetching raw response bodies.

    HttpTransport implements this on top of requests.
    """

    def fetch(self, url: str) -> bytes:
        """Fetch a URL.

        Args:
            url: Absolute URL to GET.

        Returns:
            The raw response body.

        Raises:
            FetchFailed: On any transport or HTTP error.
        """
        ...
