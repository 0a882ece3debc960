"""HTML parsing and extraction utilities.

Every product field is recovered by an ordered list of strategies. A strategy
is a plain function of the parsed page returning a value or ``None``; the
first strategy that yields a non-empty value wins. Keeping them separate lets
each fallback be tested on its own.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Optional, Sequence, TypeVar

from bs4 import BeautifulSoup

from scraper.config import (
    DEFAULT_NAME,
    PRICE_CLASS_SELECTOR,
    PRICE_META_SELECTORS,
    PRICE_TEXT_PATTERN,
)

__all__ = [
    "PageDocument",
    "TITLE_STRATEGIES",
    "IMAGE_STRATEGIES",
    "PRICE_STRATEGIES",
    "run_strategies",
    "title_from_og_meta",
    "title_from_name_meta",
    "title_from_title_tag",
    "image_from_og_meta",
    "image_from_first_img",
    "price_from_meta_tags",
    "price_from_price_class",
    "price_from_raw_html",
    "absolutize_image_url",
    "normalize_price",
    "extract_title",
    "extract_image",
    "extract_price",
]

T = TypeVar("T")

PRICE_TEXT_RE = re.compile(PRICE_TEXT_PATTERN)
PRICE_CLEAN_RE = re.compile(r"[^\d,.\-]")
# Leading float prefix, mirroring a lenient parseFloat
FLOAT_PREFIX_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class PageDocument:
    """A fetched product page: the parsed tree plus the raw HTML it came from."""

    soup: BeautifulSoup
    html: str


Strategy = Callable[[PageDocument], Optional[str]]


def _meta_content(soup: BeautifulSoup, selector: str) -> Optional[str]:
    tag = soup.select_one(selector)
    if tag is None:
        return None
    content = tag.get("content")
    if isinstance(content, str) and content.strip():
        return content.strip()
    return None


def run_strategies(strategies: Sequence[Callable[[PageDocument], Optional[T]]], page: PageDocument) -> Optional[T]:
    """Return the first non-empty value produced by ``strategies``."""
    for strategy in strategies:
        value = strategy(page)
        if value:
            return value
    return None


# =============================================================================
# Title
# =============================================================================

def title_from_og_meta(page: PageDocument) -> Optional[str]:
    """Social preview title: <meta property="og:title">."""
    return _meta_content(page.soup, 'meta[property="og:title"]')


def title_from_name_meta(page: PageDocument) -> Optional[str]:
    """Generic title meta tag: <meta name="title">."""
    return _meta_content(page.soup, 'meta[name="title"]')


def title_from_title_tag(page: PageDocument) -> Optional[str]:
    """Document <title> element."""
    title = page.soup.find("title")
    if title is None:
        return None
    text = title.get_text().strip()
    return text or None


TITLE_STRATEGIES: List[Strategy] = [
    title_from_og_meta,
    title_from_name_meta,
    title_from_title_tag,
]


def extract_title(page: PageDocument) -> str:
    """Extract the product name, falling back to a generic label."""
    return run_strategies(TITLE_STRATEGIES, page) or DEFAULT_NAME


# =============================================================================
# Image
# =============================================================================

def image_from_og_meta(page: PageDocument) -> Optional[str]:
    """Social preview image: <meta property="og:image">."""
    return _meta_content(page.soup, 'meta[property="og:image"]')


def image_from_first_img(page: PageDocument) -> Optional[str]:
    """Source of the first <img> element on the page.

    Only the first image is considered, even when it has no ``src``.
    """
    img = page.soup.find("img")
    if img is None:
        return None
    src = img.get("src")
    if isinstance(src, str) and src.strip():
        return src.strip()
    return None


IMAGE_STRATEGIES: List[Strategy] = [
    image_from_og_meta,
    image_from_first_img,
]


def absolutize_image_url(src: str) -> str:
    """Rewrite protocol-relative URLs (``//cdn...``) to explicit https."""
    if src.startswith("//"):
        return "https:" + src
    return src


def extract_image(page: PageDocument) -> str:
    """Extract the product image URL, or an empty string."""
    src = run_strategies(IMAGE_STRATEGIES, page)
    if not src:
        return ""
    return absolutize_image_url(src)


# =============================================================================
# Price
# =============================================================================

def price_from_meta_tags(page: PageDocument) -> Optional[str]:
    """First price meta tag present (microdata, product:price, name=price)."""
    for selector in PRICE_META_SELECTORS:
        value = _meta_content(page.soup, selector)
        if value:
            return value
    return None


def price_from_price_class(page: PageDocument) -> Optional[str]:
    """Text of the first element whose class mentions "price"."""
    el = page.soup.select_one(PRICE_CLASS_SELECTOR)
    if el is None:
        return None
    text = el.get_text()
    return text if text.strip() else None


def price_from_raw_html(page: PageDocument) -> Optional[str]:
    """Regex scan of the raw HTML for a currency-like number."""
    m = PRICE_TEXT_RE.search(page.html)
    if m:
        return m.group(1)
    return None


PRICE_STRATEGIES: List[Strategy] = [
    price_from_meta_tags,
    price_from_price_class,
    price_from_raw_html,
]


def normalize_price(raw: Optional[str]) -> Optional[float]:
    """Turn a scraped price string into a float rounded half-up to 2 decimals.

    Everything but digits, ``,``, ``.`` and ``-`` is dropped and the first
    comma becomes the decimal point. Thousands separators are not understood:
    ``"1.299,00"`` comes out as 1.3.

    Returns:
        The parsed price, or None if nothing numeric could be read.
    """
    if not raw:
        return None
    cleaned = PRICE_CLEAN_RE.sub("", str(raw)).replace(",", ".", 1)
    m = FLOAT_PREFIX_RE.match(cleaned)
    if not m:
        return None
    try:
        return float(Decimal(m.group()).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    except ArithmeticError:
        return None


def extract_price(page: PageDocument) -> float:
    """Extract the product price; 0.0 when no source yields a number."""
    price = normalize_price(run_strategies(PRICE_STRATEGIES, page))
    return price if price is not None else 0.0
