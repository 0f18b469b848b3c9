"""
Data models and decoders for the two wiki datasets.

The decoders turn the raw bytes returned by the API (or read back from the
cache) into typed values, and reject anything that does not have the
expected shape so a malformed response never reaches the cache.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from core.constants import MAPPINGS_DATASET, PRICES_DATASET
from core.exceptions import DecodeFailed


def _require_uint(value: Any, field_name: str) -> int:
    # bool is an int subclass, but never a valid id or price
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{field_name} must not be negative, got {value}")
    return value


def _optional_uint(value: Any, field_name: str) -> Optional[int]:
    if value is None:
        return None
    return _require_uint(value, field_name)


def _parse_item_id(key: str) -> int:
    """Parse a string-encoded item id used as a JSON object key."""
    if not (key.isascii() and key.isdigit()):
        raise ValueError(f"price key must be a numeric item id, got {key!r}")
    return int(key)


@dataclass(frozen=True)
class ItemMapping:
    """Id and name of a tradeable item."""
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemMapping":
        """Create from one entry of the mapping endpoint. Extra keys are ignored."""
        if not isinstance(data, dict):
            raise ValueError(f"mapping entry must be an object, got {type(data).__name__}")
        if "id" not in data or "name" not in data:
            raise ValueError(f"mapping entry is missing id or name: {data!r}")
        name = data["name"]
        if not isinstance(name, str):
            raise ValueError(f"name must be a string, got {name!r}")
        return cls(id=_require_uint(data["id"], "id"), name=name)


@dataclass(frozen=True)
class PriceEntry:
    """
    Latest instant-buy (high) and instant-sell (low) prices of an item.

    None means there has been no recent trade of that kind, which is not
    the same as a price of zero.
    """
    high: Optional[int] = None
    low: Optional[int] = None
    high_time: Optional[int] = None
    low_time: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceEntry":
        if not isinstance(data, dict):
            raise ValueError(f"price entry must be an object, got {type(data).__name__}")
        return cls(
            high=_optional_uint(data.get("high"), "high"),
            low=_optional_uint(data.get("low"), "low"),
            high_time=_optional_uint(data.get("highTime"), "highTime"),
            low_time=_optional_uint(data.get("lowTime"), "lowTime"),
        )


@dataclass
class PriceTable:
    """Latest prices keyed by item id."""
    data: Dict[int, PriceEntry] = field(default_factory=dict)

    def get(self, item_id: int) -> Optional[PriceEntry]:
        return self.data.get(item_id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.data

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PriceTable":
        """
        Create from the latest-prices response.

        The API keys prices by the item id encoded as a string; those keys
        are parsed back to ints here so they join directly against
        ItemMapping.id.
        """
        if not isinstance(payload, dict) or "data" not in payload:
            raise ValueError("prices document must be an object with a 'data' field")
        raw = payload["data"]
        if not isinstance(raw, dict):
            raise ValueError(f"'data' must be an object, got {type(raw).__name__}")

        data: Dict[int, PriceEntry] = {}
        for key, value in raw.items():
            data[_parse_item_id(key)] = PriceEntry.from_dict(value)
        return cls(data=data)


def _load_json(raw: bytes, dataset: str) -> Any:
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise DecodeFailed(dataset, f"invalid JSON: {e}") from e


def decode_mappings(raw: bytes) -> List[ItemMapping]:
    """
    Decode the mapping endpoint's JSON array.

    Raises:
        DecodeFailed: On invalid JSON or entries without an integer id and
            string name
    """
    payload = _load_json(raw, MAPPINGS_DATASET)
    if not isinstance(payload, list):
        raise DecodeFailed(
            MAPPINGS_DATASET, f"expected a JSON array, got {type(payload).__name__}"
        )
    try:
        return [ItemMapping.from_dict(entry) for entry in payload]
    except ValueError as e:
        raise DecodeFailed(MAPPINGS_DATASET, str(e)) from e


def decode_prices(raw: bytes) -> PriceTable:
    """
    Decode the latest-prices endpoint's JSON object.

    Raises:
        DecodeFailed: On invalid JSON, a missing 'data' field, non-numeric
            keys or non-integer prices
    """
    payload = _load_json(raw, PRICES_DATASET)
    try:
        return PriceTable.from_dict(payload)
    except ValueError as e:
        raise DecodeFailed(PRICES_DATASET, str(e)) from e
