"""Core business logic for the shortlinks URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import LinkService

__version__ = "1.0.0"

__all__ = ["ShortCodeGenerator", "LinkService", "__version__"]
