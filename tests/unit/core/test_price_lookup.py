"""
Unit tests for core.price_lookup - end-to-end lookup over both datasets.
"""

import threading

import pytest

from core.exceptions import DecodeFailed, FetchFailed
from core.models import decode_mappings, decode_prices
from core.price_lookup import PriceLookupService

pytestmark = pytest.mark.unit


class StubSource:
    """Dataset source returning fixed values and recording refresh flags."""

    def __init__(self, mappings=None, prices=None, mappings_error=None, prices_error=None):
        self.mappings = mappings
        self.prices = prices
        self.mappings_error = mappings_error
        self.prices_error = prices_error
        self.mapping_calls = []
        self.price_calls = []

    def get_mappings(self, force_refresh=False):
        self.mapping_calls.append(force_refresh)
        if self.mappings_error:
            raise self.mappings_error
        return self.mappings

    def get_prices(self, force_refresh=False):
        self.price_calls.append(force_refresh)
        if self.prices_error:
            raise self.prices_error
        return self.prices


@pytest.fixture
def source(mappings_bytes, prices_bytes):
    return StubSource(decode_mappings(mappings_bytes), decode_prices(prices_bytes))


class TestPriceLookupService:

    def test_lookup_single_item(self, source):
        results = PriceLookupService(source).lookup("zulrah's scales")

        assert len(results) == 1
        assert results[0].name == "Zulrah's scales"
        assert results[0].price.high is None
        assert results[0].price.low == 42000

    def test_lookup_skips_unpriced_matches(self, source):
        """Only 3 of the 23 twisted items have prices in the fixture."""
        results = PriceLookupService(source).lookup("TWISTED")

        assert [r.item.id for r in results] == [20997, 21000, 24664]

    def test_no_match_is_empty(self, source):
        assert PriceLookupService(source).lookup("dragon claws") == []

    def test_passes_refresh_flags(self, source):
        PriceLookupService(source).lookup("bow", refresh_mappings=True, refresh_prices=False)

        assert source.mapping_calls == [True]
        assert source.price_calls == [False]

    def test_each_dataset_loaded_once(self, source):
        PriceLookupService(source).lookup("bow")

        assert len(source.mapping_calls) == 1
        assert len(source.price_calls) == 1

    def test_mapping_failure_aborts(self, prices_bytes):
        source = StubSource(
            prices=decode_prices(prices_bytes),
            mappings_error=FetchFailed("https://prices.test/mapping", "timeout"),
        )

        with pytest.raises(FetchFailed):
            PriceLookupService(source).lookup("bow")

    def test_price_failure_aborts(self, mappings_bytes):
        source = StubSource(
            mappings=decode_mappings(mappings_bytes),
            prices_error=DecodeFailed("prices", "bad"),
        )

        with pytest.raises(DecodeFailed):
            PriceLookupService(source).lookup("bow")


class TestFailFast:

    def test_mapping_failure_does_not_wait_for_prices(self, prices_bytes):
        """A failed load is reported while the other load is still running."""
        release = threading.Event()
        finished = threading.Event()
        prices = decode_prices(prices_bytes)

        class SlowPricesSource(StubSource):
            def get_prices(self, force_refresh=False):
                release.wait(timeout=10)
                finished.set()
                return prices

        source = SlowPricesSource(mappings_error=FetchFailed("https://prices.test/mapping", "timeout"))
        try:
            with pytest.raises(FetchFailed):
                PriceLookupService(source).lookup("bow")

            assert not finished.is_set()
        finally:
            release.set()

    def test_price_failure_does_not_wait_for_mappings(self, mappings_bytes):
        release = threading.Event()
        mappings = decode_mappings(mappings_bytes)

        class SlowMappingsSource(StubSource):
            def get_mappings(self, force_refresh=False):
                release.wait(timeout=10)
                return mappings

        source = SlowMappingsSource(prices_error=DecodeFailed("prices", "bad"))
        try:
            with pytest.raises(DecodeFailed):
                PriceLookupService(source).lookup("bow")
        finally:
            release.set()
