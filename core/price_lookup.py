"""
Price lookup service.

Loads the item mapping and the latest prices, matches the query against the
mapping and joins the matches with their prices. The two datasets are
independent, so they are loaded in parallel.
"""
from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import List, Protocol, Tuple

from core.matcher import find_matches
from core.models import ItemMapping, PriceTable
from core.presenter import PricedItem, join_prices

logger = logging.getLogger(__name__)


class DatasetSource(Protocol):
    def get_mappings(self, force_refresh: bool = False) -> List[ItemMapping]: ...
    def get_prices(self, force_refresh: bool = False) -> PriceTable: ...


class PriceLookupService:
    """Answers "what do items named like X cost right now?"."""

    def __init__(self, source: DatasetSource):
        self.source = source

    def load_datasets(
            self,
            refresh_mappings: bool = False,
            refresh_prices: bool = False,
    ) -> Tuple[List[ItemMapping], PriceTable]:
        """
        Load both datasets concurrently.

        The first failure propagates as soon as it happens, without waiting
        for the other load; no partial result is returned.
        """
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            mappings_future = executor.submit(self.source.get_mappings, refresh_mappings)
            prices_future = executor.submit(self.source.get_prices, refresh_prices)
            wait([mappings_future, prices_future], return_when=FIRST_EXCEPTION)
            for future in (mappings_future, prices_future):
                if future.done() and future.exception() is not None:
                    raise future.exception()
            mappings = mappings_future.result()
            prices = prices_future.result()
        except Exception:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return mappings, prices

    def lookup(
            self,
            query: str,
            refresh_mappings: bool = False,
            refresh_prices: bool = False,
    ) -> List[PricedItem]:
        """
        Find priced items whose name contains query (case-insensitive).

        Returns:
            Matches that have a price entry, in mapping order
        """
        mappings, prices = self.load_datasets(refresh_mappings, refresh_prices)
        matches = find_matches(query, mappings)
        results = list(join_prices(matches, prices))
        logger.info(
            f"'{query}': {len(matches)} matching items, {len(results)} with prices"
        )
        return results
