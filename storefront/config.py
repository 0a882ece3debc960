"""Centralized configuration for the storefront web app."""

import os
from pathlib import Path

# Determine project root (parent of 'storefront' directory)
_THIS_DIR = Path(__file__).parent
_PROJECT_ROOT = _THIS_DIR.parent

# Catalog file - absolute path for consistent loading
PRODUCTS_FILE = os.getenv("PRODUCTS_FILE", str(_PROJECT_ROOT / "products.json"))

# Browser assets (shop page, admin page)
STATIC_DIR = _THIS_DIR / "static"

# Flask app settings (allow env overrides; default debug off for safety)
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "4000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# JSON request bodies are small; reject anything over 1 MB
MAX_CONTENT_LENGTH = 1024 * 1024

# Checkout
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "EUR").upper()
PAYPAL_API_BASE = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}
PAYPAL_TIMEOUT = 30


# Secrets are read per call so a redeploy or test can change them without re-import.

def get_admin_secret() -> str:
    return os.getenv("ADMIN_SECRET", "")


def get_paypal_client_id() -> str:
    return os.getenv("PAYPAL_CLIENT_ID", "")


def get_paypal_client_secret() -> str:
    return os.getenv("PAYPAL_CLIENT_SECRET", "")


def get_paypal_mode() -> str:
    return os.getenv("PAYPAL_MODE", "sandbox").lower()
