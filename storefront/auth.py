"""Shared-secret check for admin-only endpoints."""

import hmac
import logging
from functools import wraps
from typing import Callable, Optional

from flask import jsonify, request

from .config import get_admin_secret

__all__ = ["AuthError", "ADMIN_SECRET_HEADER", "check_admin_secret", "require_admin"]

logger = logging.getLogger(__name__)

ADMIN_SECRET_HEADER = "X-Admin-Secret"


class AuthError(Exception):
    """Missing or incorrect admin secret."""


def check_admin_secret(provided: Optional[str]) -> None:
    """Raise AuthError unless ``provided`` matches the configured secret.

    With no ``ADMIN_SECRET`` configured every request is refused.
    """
    expected = get_admin_secret()
    if not expected:
        raise AuthError("admin secret not configured")
    if not provided or not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError("invalid admin secret")


def require_admin(view: Callable) -> Callable:
    """Reject the request with 401 before the view runs unless the secret matches."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            check_admin_secret(request.headers.get(ADMIN_SECRET_HEADER, ""))
        except AuthError as e:
            logger.warning("Rejected admin request to %s: %s", request.path, e)
            return jsonify({"error": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper
