"""Product page scraper for the RepzHeaven storefront."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from scraper.cache import ScrapeCache
from scraper.config import CACHE_TTL_SECONDS, DEFAULT_CATEGORY, DEFAULT_NAME
from scraper.html_utils import normalize_price
from scraper.models import Product
from scraper.scraper import FetchError, ParseError, ScrapeError, scrape_product
from scraper.url_validation import URLValidationError

__all__ = [
    # Version
    "__version__",
    # Config
    "CACHE_TTL_SECONDS",
    "DEFAULT_CATEGORY",
    "DEFAULT_NAME",
    # Models
    "Product",
    "ScrapeCache",
    # Core functions
    "scrape_product",
    "normalize_price",
    # Errors
    "ScrapeError",
    "FetchError",
    "ParseError",
    "URLValidationError",
]
