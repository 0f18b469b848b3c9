"""
Configuration for the OSRS Price Checker.

ClientConfig carries everything the wiki client needs (cache location, TTL,
endpoints, user agent) so tests can point it at fixtures instead of the live
API. AppConfig adds the per-run options parsed from the command line.
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional

from core.constants import (
    API_TIMEOUT_EXTENDED,
    DEFAULT_USER_AGENT,
    MAPPING_URL,
    PRICE_CACHE_TTL_SECONDS,
    PRICES_LATEST_URL,
)


def get_app_dir() -> Path:
    """
    Get the application directory.

    Returns:
        Path to ~/.osrs_price_checker/ (not created here)
    """
    return Path.home() / ".osrs_price_checker"


def get_default_cache_dir() -> Path:
    """Default location of the dataset cache files."""
    return get_app_dir() / "cache"


def ttl_from_seconds(seconds: int) -> timedelta:
    """
    Convert a TTL in seconds to a timedelta.

    Values beyond what timedelta can hold are clamped to timedelta.max,
    which the TTL policy treats as "never stale".
    """
    if seconds < 0:
        raise ValueError(f"TTL must not be negative: {seconds}")
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        return timedelta.max


@dataclass
class ClientConfig:
    """Settings for OsrsWikiClient."""

    cache_dir: Path = field(default_factory=get_default_cache_dir)
    price_cache_ttl: timedelta = timedelta(seconds=PRICE_CACHE_TTL_SECONDS)
    mapping_url: str = MAPPING_URL
    prices_url: str = PRICES_LATEST_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = API_TIMEOUT_EXTENDED


@dataclass
class AppConfig:
    """Per-run options for the command-line tool."""

    item: str
    refresh_mappings: bool = False
    refresh_prices: bool = False
    debug: bool = False
    quiet: bool = False
    client: ClientConfig = field(default_factory=ClientConfig)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AppConfig":
        """Build config from parsed CLI arguments."""
        cache_dir: Optional[Path] = args.cache_dir
        client = ClientConfig(
            cache_dir=cache_dir if cache_dir is not None else get_default_cache_dir(),
            price_cache_ttl=ttl_from_seconds(args.price_cache_ttl_secs),
        )
        return cls(
            item=args.item,
            refresh_mappings=args.refresh_mappings,
            refresh_prices=args.refresh_prices,
            debug=args.debug,
            quiet=args.quiet,
            client=client,
        )
