"""
Command-line interface for OSRS price lookups.

Usage:
    osrs-price-checker "zulrah's scales"
    osrs-price-checker twisted --refresh-prices
    osrs-price-checker bow -c ./cache -t 60
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.config import AppConfig
from core.constants import APP_NAME, APP_VERSION, PRICE_CACHE_TTL_SECONDS
from core.exceptions import PriceCheckerError
from core.logging_setup import setup_logging
from core.presenter import print_results
from core.price_lookup import PriceLookupService
from data_sources.osrs_wiki_client import OsrsWikiClient

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Look up current OSRS Grand Exchange high/low prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  osrs-price-checker "zulrah's scales"     # Prices of one item
  osrs-price-checker twisted               # Every item containing "twisted"
  osrs-price-checker twisted -p            # Ignore cached prices
  osrs-price-checker twisted -m            # Re-download the item list
  osrs-price-checker bow -t 60             # Treat prices older than 60s as stale
        """
    )

    parser.add_argument("item", help="Name of item (matches any item containing this string)")
    parser.add_argument("-c", "--cache-dir", type=Path,
                        help="Cache directory (default: ~/.osrs_price_checker/cache)")
    parser.add_argument("-t", "--price-cache-ttl-secs", type=_non_negative_int,
                        default=PRICE_CACHE_TTL_SECONDS,
                        help=f"Seconds before cached prices are refetched (default: {PRICE_CACHE_TTL_SECONDS})")
    parser.add_argument("-p", "--refresh-prices", action="store_true",
                        help="Refresh prices even if cached")
    parser.add_argument("-m", "--refresh-mappings", action="store_true",
                        help="Refresh the item mapping even if cached")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def run(config: AppConfig, client: Optional[OsrsWikiClient] = None) -> int:
    """
    Run one lookup and print the results.

    Returns:
        Process exit code: 0 on success (even with no matches), 1 on failure
    """
    logger.info(f"Using config: {config}")
    try:
        with (client or OsrsWikiClient(config.client)) as wiki:
            results = PriceLookupService(wiki).lookup(
                config.item,
                refresh_mappings=config.refresh_mappings,
                refresh_prices=config.refresh_prices,
            )
    except PriceCheckerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    print_results(results)
    return 0


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and run a lookup."""
    args = build_parser().parse_args(argv)
    config = AppConfig.from_args(args)
    setup_logging(debug=config.debug, quiet=config.quiet)
    return run(config)


def main() -> None:
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
