"""Time-bounded memo of scrape results keyed by source URL."""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from scraper.config import CACHE_TTL_SECONDS
from scraper.models import Product

__all__ = ["ScrapeCache"]


class ScrapeCache:
    """URL -> Product memo with a fixed time-to-live.

    Keys are the literal URL strings, so ``/shoe`` and ``/shoe/`` are distinct
    entries. Expired entries are dropped lazily when looked up; nothing sweeps
    the map in the background and it has no size bound.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Product, float]] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> Optional[Product]:
        """Return the cached product for ``url`` unless it has expired."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            product, expires = entry
            if self._clock() > expires:
                del self._entries[url]
                return None
            return product

    def set(self, url: str, product: Product) -> None:
        """Store ``product`` under ``url`` with a fresh expiry."""
        with self._lock:
            self._entries[url] = (product, self._clock() + self.ttl_seconds)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries
