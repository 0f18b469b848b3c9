"""
Application-wide constants for the OSRS Price Checker.

Centralizes endpoints, cache names and network settings so the client and
CLI share one set of defaults. Everything here can be overridden through
ClientConfig.
"""

APP_NAME = "osrs-price-checker"
APP_VERSION = "0.3.0"


# =============================================================================
# Remote API
# =============================================================================

# The wiki asks every client for a descriptive User-Agent
DEFAULT_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"

OSRS_PRICES_BASE_URL = "https://prices.runescape.wiki/api/v1/osrs"
MAPPING_URL = f"{OSRS_PRICES_BASE_URL}/mapping"
PRICES_LATEST_URL = f"{OSRS_PRICES_BASE_URL}/latest"


# =============================================================================
# Network Timeouts (seconds)
# =============================================================================

# Default timeout for API requests
API_TIMEOUT_DEFAULT = 10

# The mapping list is a few MB
API_TIMEOUT_EXTENDED = 60


# =============================================================================
# Caching
# =============================================================================

# Price data goes stale quickly - 5 minutes
PRICE_CACHE_TTL_SECONDS = 300

MAPPINGS_DATASET = "mappings"
PRICES_DATASET = "prices"

CACHE_FILE_SUFFIX = ".json"


# =============================================================================
# Display
# =============================================================================

MISSING_PRICE_TEXT = "N/A"
