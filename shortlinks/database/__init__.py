"""Database layer for shortlinks."""

from .base import LinkStoreBase
from .postgres import PostgresLinkStore
from .models import Link, CreatedLink, SortMode

__all__ = ["LinkStoreBase", "PostgresLinkStore", "Link", "CreatedLink", "SortMode"]
