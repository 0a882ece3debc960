"""Configuration and constants for the product page scraper."""

from typing import List

__all__ = [
    "HEADERS",
    "REQUEST_TIMEOUT",
    "CACHE_TTL_SECONDS",
    "DEFAULT_NAME",
    "DEFAULT_CATEGORY",
    "PRICE_META_SELECTORS",
    "PRICE_CLASS_SELECTOR",
    "PRICE_TEXT_PATTERN",
]

# HTTP headers sent with every product page request
HEADERS = {
    "User-Agent": "Mozilla/5.0 (RepzHeaven Scraper)",
}

# Request timeout (seconds)
REQUEST_TIMEOUT = 15

# Scrape results are reused for this long (seconds)
CACHE_TTL_SECONDS = 10 * 60

# Fallbacks used when a field cannot be recovered from the page
DEFAULT_NAME = "Produkt"
DEFAULT_CATEGORY = "Uncategorized"

# Meta tags carrying a machine-readable price, in priority order
PRICE_META_SELECTORS: List[str] = [
    'meta[itemprop="price"]',
    'meta[property="product:price:amount"]',
    'meta[name="price"]',
]

# Any element whose class attribute mentions "price"
PRICE_CLASS_SELECTOR = '[class*="price"]'

# Last resort: currency-prefixed number anywhere in the raw HTML
PRICE_TEXT_PATTERN = r"(?:€|\$)?\s*([0-9]{1,3}(?:[.,][0-9]{2})?)"
