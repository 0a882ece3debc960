"""Core scraping logic: fetch a product page and guess the product on it."""

import logging
from typing import Optional

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup
from bs4.dammit import EncodingDetector

from scraper.cache import ScrapeCache
from scraper.config import DEFAULT_CATEGORY, HEADERS, REQUEST_TIMEOUT
from scraper.html_utils import PageDocument, extract_image, extract_price, extract_title
from scraper.logging_config import log_scrape_event
from scraper.models import Product, utc_now_iso
from scraper.url_validation import validate_url

__all__ = [
    "ScrapeError",
    "FetchError",
    "ParseError",
    "create_session",
    "fetch_html",
    "parse_document",
    "parse_product_page",
    "scrape_product",
    "get_default_cache",
]


class ScrapeError(Exception):
    """Base class for failures while scraping a product page."""


class FetchError(ScrapeError):
    """The page could not be fetched (network failure or non-2xx status)."""


class ParseError(ScrapeError):
    """The response body could not be read as HTML."""


# Module-level session and cache shared by callers that don't bring their own
_session: Optional[requests.Session] = None
_default_cache: Optional[ScrapeCache] = None


def create_session() -> requests.Session:
    """Create a requests Session carrying the scraper's headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    return session


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = create_session()
    return _session


def get_default_cache() -> ScrapeCache:
    """Get or create the process-wide scrape cache."""
    global _default_cache
    if _default_cache is None:
        _default_cache = ScrapeCache()
    return _default_cache


def fetch_html(url: str, session: Optional[requests.Session] = None) -> str:
    """GET a page, following redirects. No retries.

    Args:
        url: URL to fetch
        session: Optional requests.Session for connection reuse

    Returns:
        HTML content as string

    Raises:
        FetchError: On transport failure or a non-2xx response
        ParseError: If the body cannot be decoded
    """
    sess = session or _get_session()
    try:
        resp = sess.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        log_scrape_event("fetch_error", {"url": url, "error": str(e)}, level=logging.ERROR)
        raise FetchError(f"Failed to fetch {url}: {e}") from e

    if not 200 <= resp.status_code < 300:
        log_scrape_event("fetch_error", {"url": url, "status": resp.status_code}, level=logging.ERROR)
        raise FetchError(f"Fetch failed {resp.status_code}")

    # requests falls back to ISO-8859-1 without a header charset
    if "charset" not in resp.headers.get("Content-Type", "").lower():
        resp.encoding = EncodingDetector.find_declared_encoding(resp.content, is_html=True) or "utf-8"

    try:
        return str(resp.text)
    except (UnicodeDecodeError, LookupError) as e:
        raise ParseError("Failed to read HTML") from e


def parse_document(html: str) -> PageDocument:
    """Parse raw HTML into a PageDocument.

    Raises:
        ParseError: If the markup cannot be parsed at all
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise ParseError("Failed to read HTML") from e
    return PageDocument(soup=soup, html=html)


def parse_product_page(page: PageDocument, url: str) -> Product:
    """Apply the extraction strategies to a parsed page."""
    return Product(
        name=extract_title(page),
        price=extract_price(page),
        image=extract_image(page),
        link=url,
        category=DEFAULT_CATEGORY,
        scraped_at=utc_now_iso(),
    )


def scrape_product(
    url: str,
    cache: Optional[ScrapeCache] = None,
    session: Optional[requests.Session] = None,
) -> Product:
    """Turn a product page URL into a best-effort Product.

    A cached result younger than the cache TTL is returned unchanged without
    touching the network. Fields that cannot be found fall back to defaults;
    only fetch and parse failures raise.

    Args:
        url: Product page URL, used verbatim as cache key and ``link``
        cache: Scrape cache (default: process-wide cache)
        session: Optional requests.Session

    Returns:
        Product without ``id``

    Raises:
        URLValidationError: If the URL is not an http(s) address
        FetchError: Network failure or non-2xx response
        ParseError: Unreadable body
    """
    cache = cache if cache is not None else get_default_cache()

    cached = cache.get(url)
    if cached is not None:
        log_scrape_event("cache_hit", {"url": url}, level=logging.DEBUG)
        return cached

    target = validate_url(url)
    log_scrape_event("page_fetch", {"url": target})
    html = fetch_html(target, session=session)
    page = parse_document(html)
    product = parse_product_page(page, url)

    log_scrape_event(
        "product_parse",
        {"url": url, "name": product.name, "price": product.price, "has_image": bool(product.image)},
    )
    cache.set(url, product)
    return product
