"""Abstract base class for link storage implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Link, SortMode


class LinkStoreBase(ABC):
    """Abstract base class for link storage operations.

    Implementations raise ``StorageError`` for persistence failures and
    ``ConflictError`` when an insert violates short code uniqueness.
    """

    def __init__(self, db_config: str):
        """Initialize storage.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    async def connect(self) -> None:
        """Open connections ahead of the first query. Optional."""

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the links table and apply migrations (idempotent)."""
        pass

    @abstractmethod
    async def create_link(self, short_code: str, original_url: str) -> Link:
        """Insert a new link with zero clicks.

        Args:
            short_code: The short code to use
            original_url: The destination URL

        Returns:
            The stored link, including its storage-assigned id and created_at

        Raises:
            ConflictError: If short_code is already present
        """
        pass

    @abstractmethod
    async def get_link(self, short_code: str) -> Optional[Link]:
        """Get a link by exact short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def short_code_exists(self, short_code: str) -> bool:
        """Check if a short code is already in use.

        Args:
            short_code: The short code to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def record_click(self, short_code: str) -> bool:
        """Increment clicks and set last_clicked to now.

        Args:
            short_code: The short code to update

        Returns:
            True if a row was updated, False if the code no longer exists
        """
        pass

    @abstractmethod
    async def delete_link(self, short_code: str) -> bool:
        """Permanently delete a link.

        Args:
            short_code: The short code to delete

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def list_links(
        self,
        search: Optional[str] = None,
        sort: SortMode = SortMode.NEWEST,
    ) -> List[Link]:
        """List links, optionally filtered by a case-insensitive substring.

        Args:
            search: Substring matched against short_code or original_url
            sort: Ordering of the result

        Returns:
            All matching links in the requested order
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close storage connections."""
        pass
