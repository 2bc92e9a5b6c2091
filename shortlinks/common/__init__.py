"""Common utilities for shortlinks."""

from .validators import is_valid_url, is_valid_short_code, RESERVED_CODES, SHORT_CODE_PATTERN
from .timestamps import normalize_timestamp, utcnow
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "RESERVED_CODES",
    "SHORT_CODE_PATTERN",
    "normalize_timestamp",
    "utcnow",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
