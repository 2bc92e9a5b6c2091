"""Validation utilities for links."""

import re
from urllib.parse import urlparse
from typing import Any, Tuple

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError


SHORT_CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

# Single-segment paths served by the app itself
RESERVED_CODES = frozenset({"healthz"})

URL_REQUIRED_MESSAGE = "Destination URL is required"
URL_INVALID_MESSAGE = "Invalid URL format. Must be http:// or https://"
SHORT_CODE_INVALID_MESSAGE = (
    "Custom code must be 6-8 characters and only letters or numbers (A-Za-z0-9)"
)
SHORT_CODE_RESERVED_MESSAGE = "That code is reserved"

_http_url_adapter = TypeAdapter(AnyHttpUrl)


def is_valid_url(url: Any) -> Tuple[bool, str]:
    """Validate a destination URL.

    The URL must use http or https, name a host, and parse as a WHATWG URL,
    which rejects hosts containing spaces or characters such as ``<``.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, URL_REQUIRED_MESSAGE

    url = url.strip()

    try:
        result = urlparse(url)
        # Accessing .port raises for malformed ports like "http://host:abc"
        result.port
    except ValueError:
        return False, URL_INVALID_MESSAGE

    if result.scheme not in ("http", "https"):
        return False, URL_INVALID_MESSAGE

    if not result.hostname:
        return False, URL_INVALID_MESSAGE

    try:
        _http_url_adapter.validate_python(url)
    except ValidationError:
        return False, URL_INVALID_MESSAGE

    return True, ""


def is_valid_short_code(short_code: Any) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str) or not SHORT_CODE_PATTERN.fullmatch(short_code):
        return False, SHORT_CODE_INVALID_MESSAGE

    if short_code in RESERVED_CODES:
        return False, SHORT_CODE_RESERVED_MESSAGE

    return True, ""
