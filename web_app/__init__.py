"""HTTP surface for the shortlinks service."""

from .app_factory import create_app

__all__ = ["create_app"]
