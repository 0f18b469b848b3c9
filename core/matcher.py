"""
Item name matching.

Matches a user query against the item mapping by case-insensitive substring,
so "scales" finds "Zulrah's scales" and "TWISTED" finds "Twisted bow".
"""
from __future__ import annotations

from typing import Iterable, List

from core.models import ItemMapping


def normalize_name(name: str) -> str:
    """Normalize a name for comparison."""
    return name.lower()


def find_matches(query: str, mappings: Iterable[ItemMapping]) -> List[ItemMapping]:
    """
    Find every mapping whose name contains the query, ignoring case.

    Args:
        query: Partial item name
        mappings: Item mapping entries, in source order

    Returns:
        Matching entries in the same order as mappings; empty if none match.
        Entries sharing an id are all returned.
    """
    needle = normalize_name(query)
    return [m for m in mappings if needle in normalize_name(m.name)]
