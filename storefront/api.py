"""JSON API for the storefront.

Endpoints:
- GET  /api/products               public catalog, newest first
- POST /api/import                 scrape a product page into a product guess
- POST /api/save                   admin: persist an (edited) product
- POST /api/create-paypal-order    checkout: create a PayPal order for the cart
- POST /api/capture-paypal-order   checkout: capture an approved order
"""

import logging
from typing import Any, Dict, List, Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request

from scraper.scraper import ScrapeError, scrape_product
from scraper.url_validation import URLValidationError

from .auth import require_admin
from .catalog import PersistError, ValidationError, get_catalog
from .config import DEFAULT_CURRENCY
from .logging_utils import log_event
from .paypal import PaymentError

__all__ = ["api"]

logger = logging.getLogger(__name__)

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")

ApiResponse = Union[Tuple[Response, int], Response]


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _paypal_client():
    return current_app.extensions["paypal_client_factory"]()


@api.route("/products", methods=["GET"])
def list_products() -> Response:
    """Return the full catalog as a JSON array."""
    catalog = get_catalog()
    return jsonify([p.to_dict() for p in catalog.list_products()])


@api.route("/import", methods=["POST"])
def import_product() -> ApiResponse:
    """Scrape ``{url}`` and return the product guess (nothing is saved)."""
    url = _json_body().get("url")
    if not url:
        return jsonify({"error": "Missing url"}), 400
    if not isinstance(url, str):
        return jsonify({"success": False, "error": "url must be a string"}), 400

    log_event("import_request", {"url": url})
    try:
        product = scrape_product(
            url,
            cache=current_app.extensions["scrape_cache"],
            session=current_app.extensions.get("scrape_session"),
        )
    except URLValidationError as e:
        log_event("import_error", {"url": url, "error": str(e), "kind": "validation"})
        return jsonify({"success": False, "error": str(e)}), 500
    except ScrapeError as e:
        logger.error("Import error for %s: %s", url, e)
        log_event("import_error", {"url": url, "error": str(e), "kind": type(e).__name__})
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({"success": True, "product": product.to_dict()})


@api.route("/save", methods=["POST"])
@require_admin
def save_product() -> ApiResponse:
    """Persist ``{product}`` at the top of the catalog. Requires X-Admin-Secret."""
    payload = _json_body().get("product")
    catalog = get_catalog()
    try:
        product = catalog.append(payload)
    except ValidationError as e:
        return jsonify({"error": "Invalid product", "detail": str(e)}), 400
    except PersistError as e:
        log_event("save_error", {"error": str(e)})
        return jsonify({"error": "Failed to save product"}), 500

    log_event("product_saved", {"id": product.id, "name": product.name, "link": product.link})
    return jsonify({"success": True, "product": product.to_dict()})


def _cart_items(raw: Any) -> List[Dict[str, Any]]:
    if not isinstance(raw, list) or not all(isinstance(it, dict) for it in raw):
        raise ValueError("items must be a list of objects")
    return raw


@api.route("/create-paypal-order", methods=["POST"])
def create_paypal_order() -> ApiResponse:
    """Create a PayPal order for ``{items, currency?}``."""
    body = _json_body()
    try:
        items = _cart_items(body.get("items") or [])
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    currency = str(body.get("currency") or DEFAULT_CURRENCY).upper()

    try:
        order = _paypal_client().create_order(items, currency)
    except PaymentError as e:
        log_event("payment_error", {"stage": "create", "error": str(e)})
        return jsonify({"error": str(e) or "paypal error"}), 500

    log_event("order_created", {"order_id": order.get("id"), "items": len(items), "currency": currency})
    return jsonify({"id": order.get("id"), "result": order})


@api.route("/capture-paypal-order", methods=["POST"])
def capture_paypal_order() -> ApiResponse:
    """Capture ``{orderID}``."""
    order_id = _json_body().get("orderID")
    if not order_id:
        return jsonify({"error": "Missing orderID"}), 400

    try:
        capture = _paypal_client().capture_order(str(order_id))
    except PaymentError as e:
        log_event("payment_error", {"stage": "capture", "order_id": order_id, "error": str(e)})
        return jsonify({"error": str(e) or "capture error"}), 500

    log_event("order_captured", {"order_id": order_id, "status": capture.get("status")})
    return jsonify({"result": capture})


@api.route("/<path:unknown>", methods=["GET", "POST", "PUT", "DELETE", "PATCH"])
def api_not_found(unknown: str) -> ApiResponse:
    return jsonify({"error": "Not found"}), 404
