"""Command-line interface for the product scraper.

Scrape one product page and print the guess, optionally saving it straight
into a catalog file (the same file the storefront serves).

Examples:
    python -m scraper.cli https://example.com/shoe
    python -m scraper.cli https://example.com/shoe --json
    python -m scraper.cli https://example.com/shoe --catalog products.json --category Shoes
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

__all__ = ["main", "parse_args", "format_product"]

from scraper.logging_config import setup_logging
from scraper.models import Product
from scraper.scraper import ScrapeError, scrape_product
from scraper.url_validation import URLValidationError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape name, price and image from a product page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("url", help="Product page URL")
    parser.add_argument(
        "--catalog",
        metavar="PATH",
        help="Append the scraped product to this catalog JSON file",
    )
    parser.add_argument(
        "--category",
        help="Category to store with the product (default: Uncategorized)",
    )
    parser.add_argument("--json", action="store_true", help="Print the product as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def format_product(product: Product) -> str:
    """Human readable summary of a product."""
    lines = [
        f"Name:     {product.name}",
        f"Price:    {product.price:.2f}",
        f"Image:    {product.image or '-'}",
        f"Link:     {product.link}",
        f"Category: {product.category}",
    ]
    if product.id:
        lines.insert(0, f"ID:       {product.id}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_to_file=False)

    try:
        product = scrape_product(args.url)
    except URLValidationError as e:
        print(f"Invalid URL: {e}", file=sys.stderr)
        return 1
    except ScrapeError as e:
        print(f"Scrape failed: {e}", file=sys.stderr)
        return 1

    if args.category:
        product.category = args.category

    if args.catalog:
        from storefront.catalog import CatalogStore, PersistError, ValidationError

        store = CatalogStore(args.catalog)
        store.load()
        try:
            product = store.append(product.to_dict())
        except (ValidationError, PersistError) as e:
            print(f"Save failed: {e}", file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps(product.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_product(product))
    return 0


if __name__ == "__main__":
    sys.exit(main())
