"""Thin client for the PayPal Orders v2 REST API.

Only what checkout needs: an OAuth2 client-credentials token, order creation
from cart line items and order capture. Responses are handed back as parsed
JSON without reshaping.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests  # type: ignore[import-untyped]

from .config import (
    DEFAULT_CURRENCY,
    PAYPAL_API_BASE,
    PAYPAL_TIMEOUT,
    get_paypal_client_id,
    get_paypal_client_secret,
    get_paypal_mode,
)

__all__ = [
    "PaymentError",
    "PayPalClient",
    "build_order_body",
    "client_from_env",
]

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class PaymentError(Exception):
    """PayPal rejected a request or could not be reached."""


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def _line_quantity(item: Dict[str, Any]) -> int:
    qty = item.get("qty") or 1
    try:
        return max(1, int(qty))
    except (TypeError, ValueError):
        return 1


def _line_price(item: Dict[str, Any]) -> Decimal:
    """Unit price rounded half-up to cents; unreadable prices count as 0."""
    try:
        return Decimal(str(float(item.get("price") or 0))).quantize(CENT, rounding=ROUND_HALF_UP)
    except (TypeError, ValueError, ArithmeticError):
        return Decimal("0.00")


def build_order_body(items: List[Dict[str, Any]], currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
    """Build the create-order request body for a cart.

    Args:
        items: Cart lines with ``name``, ``price`` and optional ``qty`` (default 1)
        currency: ISO currency code

    Returns:
        JSON body for ``POST /v2/checkout/orders``
    """
    currency = currency.upper()
    # item_total must equal the sum of the rounded line amounts
    total = sum((_line_price(it) * _line_quantity(it) for it in items), Decimal("0.00"))
    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "amount": {
                    "currency_code": currency,
                    "value": _money(total),
                    "breakdown": {
                        "item_total": {"currency_code": currency, "value": _money(total)},
                    },
                },
                "items": [
                    {
                        "name": str(it.get("name") or "Produkt")[:127],
                        "unit_amount": {"currency_code": currency, "value": _money(_line_price(it))},
                        "quantity": str(_line_quantity(it)),
                    }
                    for it in items
                ],
            }
        ],
    }


class PayPalClient:
    """Minimal PayPal REST client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        mode: str = "sandbox",
        session: Optional[requests.Session] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.mode = "live" if mode == "live" else "sandbox"
        self.base_url = PAYPAL_API_BASE[self.mode]
        self.session = session or requests.Session()

    def _post(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.post(url, timeout=PAYPAL_TIMEOUT, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("PayPal request to %s failed: %s", path, e)
            raise PaymentError(f"PayPal unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {"result": data}

        if not 200 <= resp.status_code < 300:
            message = (
                data.get("message")
                or data.get("error_description")
                or data.get("error")
                or f"PayPal error {resp.status_code}"
            )
            logger.error("PayPal %s returned %s: %s", path, resp.status_code, message)
            raise PaymentError(message)
        return data

    def get_access_token(self) -> str:
        """Fetch an OAuth2 access token using the client credentials."""
        if not self.client_id or not self.client_secret:
            raise PaymentError("PayPal credentials not configured")
        data = self._post(
            "/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
        token = data.get("access_token")
        if not token:
            raise PaymentError("PayPal returned no access token")
        return str(token)

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.get_access_token()}",
            "Content-Type": "application/json",
        }

    def create_order(self, items: List[Dict[str, Any]], currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
        """Create a CAPTURE-intent order for the cart; returns PayPal's order JSON."""
        headers = self._auth_headers()
        headers["Prefer"] = "return=representation"
        return self._post(
            "/v2/checkout/orders",
            json=build_order_body(items, currency),
            headers=headers,
        )

    def capture_order(self, order_id: str) -> Dict[str, Any]:
        """Capture payment for an approved order."""
        return self._post(
            f"/v2/checkout/orders/{quote(str(order_id), safe='')}/capture",
            json={},
            headers=self._auth_headers(),
        )


def client_from_env() -> PayPalClient:
    """Build a client from PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET / PAYPAL_MODE."""
    return PayPalClient(
        get_paypal_client_id(),
        get_paypal_client_secret(),
        mode=get_paypal_mode(),
    )
