"""
Unit tests for data_sources.base_api - HTTP transport.

Tests cover:
- Session headers (User-Agent, Accept)
- Retry adapter configuration
- Mapping of transport and HTTP errors to FetchFailed
"""

from unittest.mock import Mock

import pytest
import requests

from core.exceptions import FetchFailed, RateLimitExceeded
from core.interfaces import ITransport
from data_sources.base_api import HttpTransport

pytestmark = pytest.mark.unit

URL = "https://prices.test/api/v1/osrs/latest"


def _response(status_code=200, content=b"{}", headers=None):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("utf-8", errors="replace")
    response.headers = headers or {}
    return response


@pytest.fixture
def session():
    mock_session = Mock(spec=requests.Session)
    mock_session.headers = {}
    return mock_session


class TestHttpTransportSetup:

    def test_sets_user_agent_and_accept(self):
        transport = HttpTransport(user_agent="osrs-price-checker/9.9")

        assert transport.session.headers["User-Agent"] == "osrs-price-checker/9.9"
        assert transport.session.headers["Accept"] == "application/json"
        transport.close()

    def test_default_user_agent(self):
        with HttpTransport() as transport:
            assert transport.session.headers["User-Agent"].startswith("osrs-price-checker/")

    def test_mounts_retry_adapter(self):
        with HttpTransport() as transport:
            adapter = transport.session.get_adapter("https://prices.runescape.wiki")
            assert adapter.max_retries.total == HttpTransport.MAX_RETRIES
            assert 503 in adapter.max_retries.status_forcelist

    def test_satisfies_transport_protocol(self):
        with HttpTransport() as transport:
            assert isinstance(transport, ITransport)

    def test_context_manager_closes_session(self, session):
        with HttpTransport(session=session):
            pass

        session.close.assert_called_once()


class TestHttpTransportFetch:

    def test_returns_raw_body(self, session):
        session.get.return_value = _response(content=b'{"data": {}}')
        transport = HttpTransport(session=session, timeout=7)

        assert transport.fetch(URL) == b'{"data": {}}'
        session.get.assert_called_once_with(URL, timeout=7)

    def test_connection_error_raises_fetch_failed(self, session):
        session.get.side_effect = requests.ConnectionError("refused")
        transport = HttpTransport(session=session)

        with pytest.raises(FetchFailed) as exc_info:
            transport.fetch(URL)

        assert exc_info.value.url == URL
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_timeout_raises_fetch_failed(self, session):
        session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(FetchFailed):
            HttpTransport(session=session).fetch(URL)

    @pytest.mark.parametrize("status", [400, 403, 404, 500, 503])
    def test_error_status_raises_fetch_failed(self, session, status):
        session.get.return_value = _response(status_code=status, content=b"error")

        with pytest.raises(FetchFailed) as exc_info:
            HttpTransport(session=session).fetch(URL)

        assert exc_info.value.status_code == status

    def test_rate_limit_uses_retry_after(self, session):
        session.get.return_value = _response(status_code=429, headers={"Retry-After": "12"})

        with pytest.raises(RateLimitExceeded) as exc_info:
            HttpTransport(session=session).fetch(URL)

        assert exc_info.value.retry_after == 12
        assert isinstance(exc_info.value, FetchFailed)

    def test_rate_limit_with_unparseable_retry_after(self, session):
        session.get.return_value = _response(status_code=429, headers={"Retry-After": "soon"})

        with pytest.raises(RateLimitExceeded) as exc_info:
            HttpTransport(session=session).fetch(URL)

        assert exc_info.value.retry_after == 60
