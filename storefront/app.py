"""Flask app for the RepzHeaven storefront.

Serves the shop and admin pages, the product catalog API, the admin import
and save flow, and the PayPal checkout pass-through.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request, send_from_directory
from flask_cors import CORS

from scraper.cache import ScrapeCache

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from .api import api  # noqa: E402
from .catalog import CatalogStore, get_catalog  # noqa: E402
from .config import (  # noqa: E402
    FLASK_DEBUG,
    FLASK_HOST,
    FLASK_PORT,
    MAX_CONTENT_LENGTH,
    PRODUCTS_FILE,
    STATIC_DIR,
    get_paypal_client_id,
    get_paypal_mode,
)
from .paypal import PayPalClient, client_from_env  # noqa: E402

__all__ = ["create_app"]

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def create_app(
    catalog_path: Optional[Union[str, Path]] = None,
    scrape_cache: Optional[ScrapeCache] = None,
    paypal_client_factory: Optional[Callable[[], PayPalClient]] = None,
    scrape_session=None,
    static_dir: Optional[Union[str, Path]] = None,
) -> Flask:
    """Build the Flask app and load the catalog.

    Args:
        catalog_path: Catalog JSON file (default: PRODUCTS_FILE)
        scrape_cache: Scrape cache (default: a fresh 10 minute cache)
        paypal_client_factory: Returns a PayPalClient per request (default: from env)
        scrape_session: Optional requests.Session used for product page fetches
        static_dir: Directory holding index.html and other browser assets
    """
    app = Flask(__name__, static_folder=None)
    app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
    app.json.sort_keys = False

    catalog = CatalogStore(catalog_path or PRODUCTS_FILE)
    catalog.load()
    app.extensions["catalog"] = catalog
    app.extensions["scrape_cache"] = scrape_cache if scrape_cache is not None else ScrapeCache()
    app.extensions["scrape_session"] = scrape_session
    app.extensions["paypal_client_factory"] = paypal_client_factory or client_from_env

    app.register_blueprint(api)
    CORS(app, resources={r"/api/*": {"origins": "*"}}, allow_headers=["Content-Type", "X-Admin-Secret"])

    assets = Path(static_dir) if static_dir else STATIC_DIR

    @app.after_request
    def add_headers(response: Response) -> Response:
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        logger.info("%s %s -> %s", request.method, request.path, response.status_code)
        return response

    @app.errorhandler(413)
    def too_large(_e) -> tuple:
        return jsonify({"error": "Request body too large"}), 413

    @app.route("/config", methods=["GET"])
    def client_config() -> Response:
        """Public checkout settings for the browser."""
        return jsonify({
            "paypalClientId": get_paypal_client_id(),
            "paypalMode": get_paypal_mode(),
        })

    @app.route("/health", methods=["GET"])
    def health() -> Response:
        return jsonify({"status": "ok", "products": len(get_catalog(app))})

    @app.route("/", defaults={"path": ""}, methods=["GET"])
    @app.route("/<path:path>", methods=["GET"])
    def spa(path: str) -> Response:
        """Serve a static asset if it exists, else the shop page."""
        if path and (assets / path).is_file():
            return send_from_directory(assets, path)
        return send_from_directory(assets, "index.html")

    return app


if __name__ == "__main__":
    from scraper.logging_config import setup_logging

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    setup_logging(log_to_console=False)
    create_app().run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
