"""
Console output for price lookups.

Joins matched items with the price table and formats one line per item.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, TextIO

from core.constants import MISSING_PRICE_TEXT
from core.models import ItemMapping, PriceEntry, PriceTable


@dataclass(frozen=True)
class PricedItem:
    """A matched item together with its latest prices."""
    item: ItemMapping
    price: PriceEntry

    @property
    def name(self) -> str:
        return self.item.name


def join_prices(matches: Iterable[ItemMapping], prices: PriceTable) -> Iterator[PricedItem]:
    """
    Pair each match with its price entry.

    Items without an entry in the price table (untradeable, or not traded
    since the table was fetched) are skipped.
    """
    for item in matches:
        price = prices.get(item.id)
        if price is not None:
            yield PricedItem(item=item, price=price)


def format_price(value: Optional[int]) -> str:
    """Format a price with thousands separators, or N/A when absent."""
    if value is None:
        return MISSING_PRICE_TEXT
    return f"{value:,}"


def format_priced_item(priced: PricedItem) -> str:
    return (
        f"{priced.name} -> high: {format_price(priced.price.high)}, "
        f"low: {format_price(priced.price.low)}"
    )


def print_results(results: List[PricedItem], out: Optional[TextIO] = None) -> None:
    """Print one line per priced item."""
    out = out if out is not None else sys.stdout
    for priced in results:
        print(format_priced_item(priced), file=out)
