"""File-backed product catalog.

The whole catalog is a single JSON array, newest product first. It is loaded
once at startup and rewritten in full on every save. Appends are serialized
through one lock so two concurrent saves cannot overwrite each other's copy
on disk.
"""

import json
import logging
import math
import os
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from flask import current_app

from scraper.config import DEFAULT_CATEGORY
from scraper.models import Product, utc_now_iso

__all__ = [
    "CatalogStore",
    "ValidationError",
    "PersistError",
    "validate_product_payload",
    "get_catalog",
]

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """A product payload is missing required fields or has invalid values."""


class PersistError(Exception):
    """The catalog file could not be rewritten."""


def validate_product_payload(payload: Any) -> Product:
    """Check a save payload and turn it into an (unsaved) Product.

    ``name`` is required. ``price`` defaults to 0 and must be a non-negative
    number; it is rounded to 2 decimals.

    Raises:
        ValidationError: If the payload cannot become a catalog entry
    """
    if not isinstance(payload, dict):
        raise ValidationError("product must be an object")

    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("product name is required")

    raw_price = payload.get("price", 0)
    if raw_price is None or raw_price == "":
        raw_price = 0
    if isinstance(raw_price, bool):
        raise ValidationError("price must be a number")
    try:
        price = float(raw_price)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"price must be a number, got {raw_price!r}") from e
    if not math.isfinite(price) or price < 0:
        raise ValidationError("price must be a non-negative number")

    return Product(
        name=name.strip(),
        price=round(price, 2),
        image=str(payload.get("image") or ""),
        link=str(payload.get("link") or ""),
        category=str(payload.get("category") or DEFAULT_CATEGORY),
        scraped_at=payload.get("scrapedAt"),
    )


class CatalogStore:
    """Owns the in-memory product list and its backing file."""

    def __init__(self, path: Union[str, Path], clock: Callable[[], float] = time.time):
        self.path = Path(path)
        self._clock = clock
        self._products: List[Product] = []
        self._lock = threading.Lock()
        self._last_id_ms = 0

    def load(self) -> None:
        """Load the catalog, creating an empty file when there is none.

        A file that cannot be read or parsed is logged and the catalog starts
        empty; the broken file is left in place until the next save.
        """
        with self._lock:
            try:
                if not self.path.exists():
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                    self._write([])
                    self._products = []
                    logger.info("Created empty catalog at %s", self.path)
                    return

                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, list):
                    raise ValueError(f"expected a JSON array, got {type(data).__name__}")
                self._products = [Product.from_dict(item) for item in data if isinstance(item, dict)]
                logger.info("Loaded %d products from %s", len(self._products), self.path)
            except (OSError, ValueError, TypeError) as e:
                logger.error("Failed to load catalog %s: %s", self.path, e)
                self._products = []

    def list_products(self) -> List[Product]:
        """All products, newest first."""
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def _next_id(self) -> str:
        now_ms = int(self._clock() * 1000)
        if now_ms <= self._last_id_ms:
            now_ms = self._last_id_ms + 1
        self._last_id_ms = now_ms
        return f"p_{now_ms}"

    def _write(self, products: List[Product]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([p.to_dict() for p in products], f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def append(self, payload: Dict[str, Any]) -> Product:
        """Validate, stamp and prepend a product, then rewrite the file.

        Raises:
            ValidationError: Before anything is touched, for a bad payload
            PersistError: If the file rewrite fails. The product stays in
                memory and is written out by the next successful append.
        """
        product = validate_product_payload(payload)

        with self._lock:
            product.id = self._next_id()
            product.created_at = utc_now_iso()
            self._products.insert(0, product)
            try:
                self._write(self._products)
            except OSError as e:
                logger.error("Failed to write catalog %s: %s", self.path, e)
                raise PersistError(f"Failed to save product: {e}") from e

        logger.info("Saved product %s (%s)", product.id, product.name)
        return product


def get_catalog(app=None) -> Optional[CatalogStore]:
    """Get the catalog store attached to the (current) Flask app."""
    app = app or current_app
    return app.extensions.get("catalog")
