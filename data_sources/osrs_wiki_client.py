"""
OSRS Wiki real-time prices client.

Provides the two datasets the price checker needs:
- mapping: id, name (and more) of every tradeable item
- latest: most recent instant-buy/instant-sell price per item id

Reference: https://prices.runescape.wiki/api/v1/osrs

The mapping is cached until the user forces a refresh; latest prices are
refetched once the cached copy is older than the configured TTL.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.cache_store import CacheStore
from core.config import ClientConfig
from core.constants import MAPPINGS_DATASET, PRICES_DATASET
from core.dataset_loader import Dataset, DatasetLoader
from core.interfaces import ITransport
from core.models import ItemMapping, PriceTable, decode_mappings, decode_prices
from core.refresh_policy import PresenceOnlyPolicy, TtlPolicy
from data_sources.base_api import HttpTransport

logger = logging.getLogger(__name__)


class OsrsWikiClient:
    """
    Client for the OSRS Wiki prices API with an on-disk cache.

    Example:
        with OsrsWikiClient(ClientConfig()) as client:
            mappings = client.get_mappings()
            prices = client.get_prices(force_refresh=True)
    """

    def __init__(
            self,
            config: Optional[ClientConfig] = None,
            transport: Optional[ITransport] = None,
            store: Optional[CacheStore] = None,
    ):
        """
        Args:
            config: Cache location, TTL, endpoints and user agent
            transport: Transport to fetch with; an HttpTransport built from
                config is used when omitted
            store: Cache store; one rooted at config.cache_dir is used when omitted
        """
        self.config = config or ClientConfig()
        self._owns_transport = transport is None
        self.transport: ITransport = transport or HttpTransport(
            user_agent=self.config.user_agent,
            timeout=self.config.timeout,
        )
        self.store = store or CacheStore(self.config.cache_dir)
        self.loader = DatasetLoader(self.store, self.transport)

        self.mappings_dataset: Dataset[List[ItemMapping]] = Dataset(
            name=MAPPINGS_DATASET,
            url=self.config.mapping_url,
            decode=decode_mappings,
            policy=PresenceOnlyPolicy(),
        )
        self.prices_dataset: Dataset[PriceTable] = Dataset(
            name=PRICES_DATASET,
            url=self.config.prices_url,
            decode=decode_prices,
            policy=TtlPolicy(self.config.price_cache_ttl),
        )

        logger.info(
            f"Initialized {self.__class__.__name__} - cache: {self.store.cache_dir}, "
            f"price TTL: {self.config.price_cache_ttl}"
        )

    def get_mappings(self, force_refresh: bool = False) -> List[ItemMapping]:
        """Get the item id/name mapping, from cache unless missing or forced."""
        mappings = self.loader.load(self.mappings_dataset, force_refresh)
        logger.debug(f"Loaded {len(mappings)} item mappings")
        return mappings

    def get_prices(self, force_refresh: bool = False) -> PriceTable:
        """Get the latest price table, from cache unless missing, stale or forced."""
        prices = self.loader.load(self.prices_dataset, force_refresh)
        logger.debug(f"Loaded prices for {len(prices)} items")
        return prices

    def close(self):
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self.transport, HttpTransport):
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
