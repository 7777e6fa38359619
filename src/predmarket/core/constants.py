"""Application-wide constants.

These are fixed values that don't change between environments.
For configurable values, see config.py Settings.
"""

# ─────────────────────────────────────────────────────────────
# Market field limits
# ─────────────────────────────────────────────────────────────
MARKET_TITLE_MIN_LENGTH = 3
MARKET_TITLE_MAX_LENGTH = 200
MARKET_CATEGORY_MAX_LENGTH = 50
MARKET_MAX_TAGS = 20
MARKET_DEFAULT_PROBABILITY = 50.0

# ─────────────────────────────────────────────────────────────
# Listing defaults (can be overridden in Settings)
# ─────────────────────────────────────────────────────────────
DEFAULT_PAGE_SIZE = 9  # 3x3 grid on the explore page
MAX_PAGE_SIZE = 100
# Keeps (page - 1) * MAX_PAGE_SIZE within a Postgres bigint OFFSET
MAX_PAGE = 2**63 // MAX_PAGE_SIZE

# ─────────────────────────────────────────────────────────────
# HTTP
# ─────────────────────────────────────────────────────────────
DEFAULT_MARKET_CREATE_RATE_LIMIT = "30/minute"
LOCAL_DEV_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1):(5173|5174)$"

# ─────────────────────────────────────────────────────────────
# Database
# ─────────────────────────────────────────────────────────────
MARKETS_TABLE = "markets"
