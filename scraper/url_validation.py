"""URL validation and sanitization utilities.

Product pages may live on any shop, so there is no domain allow-list here;
we only refuse URLs that are not plain web addresses.
"""

import re
from typing import Optional, Set
from urllib.parse import urlparse

__all__ = [
    "validate_url",
    "sanitize_url",
    "is_safe_url",
    "URLValidationError",
]


class URLValidationError(ValueError):
    """Raised when URL validation fails."""
    pass


# Dangerous URL schemes to reject
DANGEROUS_SCHEMES = {"javascript", "data", "vbscript", "file"}

SUSPICIOUS_PATTERNS = [
    r"<script",          # XSS attempt
    r"javascript:",      # JS injection
]


def sanitize_url(url: str) -> str:
    """Sanitize a URL by stripping whitespace and control characters.

    Args:
        url: Raw URL string

    Returns:
        Sanitized URL string
    """
    if not url:
        return ""

    url = url.strip()
    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)
    return url.replace("%00", "")


def validate_url(url: str, allowed_domains: Optional[Set[str]] = None) -> str:
    """Validate a URL before fetching it.

    Args:
        url: URL to validate
        allowed_domains: Optional set of hosts to restrict fetching to

    Returns:
        Sanitized URL

    Raises:
        URLValidationError: If URL is empty, not http(s) or looks malicious
    """
    if not url or not isinstance(url, str):
        raise URLValidationError("URL is empty")

    url = sanitize_url(url)

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise URLValidationError(f"Failed to parse URL: {e}") from e

    scheme = parsed.scheme.lower()
    if scheme in DANGEROUS_SCHEMES:
        raise URLValidationError(f"Dangerous URL scheme: {scheme}")
    if scheme not in ("http", "https"):
        raise URLValidationError(f"Invalid URL scheme: {scheme or '(none)'}")

    host = (parsed.hostname or "").lower()
    if not host:
        raise URLValidationError("URL has no domain")
    if allowed_domains and host not in allowed_domains:
        raise URLValidationError(f"URL domain '{host}' not in allowed domains")

    url_lower = url.lower()
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, url_lower):
            raise URLValidationError(f"URL contains suspicious pattern: {pattern}")

    return url


def is_safe_url(url: str) -> bool:
    """Check if a URL is safe without raising exceptions."""
    try:
        validate_url(url)
        return True
    except URLValidationError:
        return False
