"""Data models for products."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from scraper.config import DEFAULT_CATEGORY

__all__ = ["Product", "utc_now_iso"]


@dataclass
class Product:
    """A storefront product, either a fresh scrape guess or a catalog entry.

    Scraped products have no ``id`` and no ``created_at``; both are assigned
    when an admin saves the product into the catalog.
    """

    # Required fields
    name: str
    price: float = 0.0

    # Optional fields
    image: str = ""
    link: str = ""
    category: str = DEFAULT_CATEGORY

    # Timestamps (ISO-8601)
    created_at: Optional[str] = None
    scraped_at: Optional[str] = None

    # Catalog ID (set on save)
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape used by the API and the catalog file."""
        data: Dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data.update(
            {
                "name": self.name,
                "price": self.price,
                "image": self.image,
                "link": self.link,
                "category": self.category,
            }
        )
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        if self.scraped_at is not None:
            data["scrapedAt"] = self.scraped_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build a Product from its JSON shape, tolerating missing keys."""
        price = data.get("price")
        return cls(
            name=str(data.get("name") or ""),
            price=float(price) if price is not None else 0.0,
            image=data.get("image") or "",
            link=data.get("link") or "",
            category=data.get("category") or DEFAULT_CATEGORY,
            created_at=data.get("createdAt"),
            scraped_at=data.get("scrapedAt"),
            id=data.get("id"),
        )


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
