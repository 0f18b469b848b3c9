"""
Error taxonomy for the price checker.

Every failure that can abort a dataset load derives from PriceCheckerError,
so the CLI has a single type to catch at its boundary. None of these are
retried by the cache layer.
"""
from __future__ import annotations

from typing import Optional


class PriceCheckerError(Exception):
    """Base class for all price checker failures."""
    pass


class CacheError(PriceCheckerError):
    """Base class for on-disk cache failures."""

    def __init__(self, dataset: str, message: str):
        self.dataset = dataset
        super().__init__(f"{dataset}: {message}")


class CacheMissing(CacheError):
    """Raised when a cache record is read but does not exist."""

    def __init__(self, dataset: str):
        super().__init__(dataset, "cache record does not exist")


class CacheUnreadable(CacheError):
    """Raised when a cache record exists but its content or metadata cannot be read."""
    pass


class CacheWriteFailed(CacheError):
    """Raised when a freshly fetched dataset cannot be persisted."""
    pass


class FetchFailed(PriceCheckerError):
    """Transport-level failure (connection, timeout, HTTP error status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Request to {url} failed: {message}")


class RateLimitExceeded(FetchFailed):
    """Raised when the API answers with HTTP 429."""

    def __init__(self, url: str, retry_after: int = 60):
        self.retry_after = retry_after
        super().__init__(
            url,
            f"rate limit exceeded, retry after {retry_after} seconds",
            status_code=429,
        )


class DecodeFailed(PriceCheckerError):
    """Raised when a payload is not valid JSON or does not match the expected shape."""

    def __init__(self, dataset: str, message: str):
        self.dataset = dataset
        super().__init__(f"Unable to decode {dataset}: {message}")
