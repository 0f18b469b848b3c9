"""
HTTP transport with connection pooling, retries and error mapping.

All network access goes through HttpTransport.fetch(), which returns the raw
response body. Caching and decoding happen above this layer; here every
failure is reported as FetchFailed.
"""

from typing import Optional, Tuple, Union
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from core.constants import API_TIMEOUT_DEFAULT, DEFAULT_USER_AGENT
from core.exceptions import FetchFailed, RateLimitExceeded

# Get logger - configuration should be done by application entrypoint, not library modules
logger = logging.getLogger(__name__)


TimeoutType = Union[int, float, Tuple[int, int], Tuple[float, float]]


class HttpTransport:
    """
    Fetches URLs over a pooled requests.Session.

    Server errors (5xx) are retried with exponential backoff by the urllib3
    adapter; anything still failing after that surfaces as FetchFailed.
    """

    # Connection pool settings
    POOL_CONNECTIONS = 4   # Number of connection pools to cache
    POOL_MAXSIZE = 4       # Max connections per pool
    MAX_RETRIES = 3        # Retries for connection errors
    BACKOFF_FACTOR = 0.5   # Exponential backoff multiplier
    RETRY_STATUS_CODES = frozenset({500, 502, 503, 504})  # Server errors to retry

    def __init__(
            self,
            user_agent: Optional[str] = None,
            timeout: TimeoutType = API_TIMEOUT_DEFAULT,
            session: Optional[requests.Session] = None,
    ):
        """
        Args:
            user_agent: User-Agent header identifying this client
            timeout: Request timeout in seconds, or (connect, read)
            session: Pre-built session (tests); one is created if omitted
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout: TimeoutType = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
            'Accept': 'application/json'
        })

        if session is None:
            retry_strategy = Retry(
                total=self.MAX_RETRIES,
                backoff_factor=self.BACKOFF_FACTOR,
                status_forcelist=self.RETRY_STATUS_CODES,
                allowed_methods=["GET"],
                raise_on_status=False  # Don't raise, let us handle status codes
            )
            adapter = HTTPAdapter(
                pool_connections=self.POOL_CONNECTIONS,
                pool_maxsize=self.POOL_MAXSIZE,
                max_retries=retry_strategy
            )
            self.session.mount('https://', adapter)
            self.session.mount('http://', adapter)

        logger.debug(f"Initialized {self.__class__.__name__} - UA: {self.user_agent}, timeout: {timeout}")

    def fetch(self, url: str) -> bytes:
        """
        GET a URL and return the raw body.

        Raises:
            RateLimitExceeded: If the API returns 429
            FetchFailed: On connection errors, timeouts or any other status >= 400
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise FetchFailed(url, str(e)) from e

        if response.status_code == 429:
            try:
                retry_after = int(response.headers.get('Retry-After', 60))
            except ValueError:
                retry_after = 60
            logger.warning(f"Rate limited! Retry after {retry_after}s")
            raise RateLimitExceeded(url, retry_after=retry_after)

        if response.status_code >= 400:
            error_msg = f"API error {response.status_code}: {response.text[:200]}"
            logger.error(error_msg)
            raise FetchFailed(url, error_msg, status_code=response.status_code)

        body = response.content
        logger.info(f"Request successful: GET {url} ({len(body)} bytes)")
        return body

    def close(self):
        """Clean up resources"""
        self.session.close()
        logger.debug(f"Closed {self.__class__.__name__}")

    def __enter__(self):
        """Context manager entry - returns self for use in 'with' blocks."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensures session is closed."""
        self.close()
        return False  # Don't suppress exceptions
