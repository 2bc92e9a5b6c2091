"""Business logic service for shortlinks."""

import logging
from typing import Any, Dict, List, Optional

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.models import CreatedLink, Link, SortMode
from .common.validators import is_valid_url, is_valid_short_code
from .common.url_builder import build_short_url
from .errors import ConflictError, NotFoundError, ValidationError


class LinkService:
    """Service layer for creating, resolving, listing and deleting links.

    Holds no link state of its own. Every call goes to storage, and
    multi-step flows (check then insert, lookup then update) are not wrapped
    in a transaction.
    """

    def __init__(
        self,
        db: LinkStoreBase,
        base_url: str,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ):
        """Initialize link service.

        Args:
            db: Storage instance, opened and closed by the caller
            base_url: Origin used to build short URLs
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Random codes to try before giving up
        """
        self.db = db
        self.base_url = base_url
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries

    async def create_link(
        self,
        original_url: Any,
        custom_code: Optional[str] = None,
    ) -> CreatedLink:
        """Create a new short link.

        Args:
            original_url: Destination URL, http or https
            custom_code: Optional user-chosen code; blank means none

        Returns:
            The stored link and its short URL

        Raises:
            ValidationError: Missing/invalid URL or malformed custom code
            ConflictError: Custom code already taken
            GenerationExhaustedError: No free random code found
            StorageError: Persistence failure
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValidationError(error)
        original_url = original_url.strip()

        code = custom_code.strip() if isinstance(custom_code, str) else None

        if code:
            is_valid, error = is_valid_short_code(code)
            if not is_valid:
                raise ValidationError(error)

            if await self.db.short_code_exists(code):
                raise ConflictError("That code is already taken")
        else:
            code = await self.generator.generate_unique(
                self.db.short_code_exists,
                max_attempts=self.max_collision_retries,
            )

        # A racing insert of the same code surfaces here as ConflictError
        link = await self.db.create_link(code, original_url)

        self.logger.info(f"Created short link: {code} -> {original_url}")

        return CreatedLink(link=link, short_url=build_short_url(code, self.base_url))

    async def resolve_and_track(self, short_code: str) -> str:
        """Resolve a code to its destination and count the click.

        Args:
            short_code: The short code from the redirect path

        Returns:
            The destination URL

        Raises:
            NotFoundError: Code never existed or was deleted
            StorageError: Persistence failure
        """
        if not self.generator.is_valid_format(short_code):
            raise NotFoundError("Short URL not found")

        link = await self.db.get_link(short_code)
        if link is None:
            self.logger.debug(f"Short code not found: {short_code}")
            raise NotFoundError("Short URL not found")

        if not await self.db.record_click(short_code):
            self.logger.warning(
                f"Click on {short_code} lost: link deleted during redirect"
            )

        self.logger.debug(f"Resolved {short_code} -> {link.original_url}")
        return link.original_url

    async def list_links(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Link]:
        """List links filtered by substring and ordered by ``sort``.

        Unknown sort values fall back to newest first.
        """
        return await self.db.list_links(search=search or None, sort=SortMode.parse(sort))

    async def get_link(self, short_code: str) -> Link:
        """Get a link without counting a click.

        Raises:
            NotFoundError: If the code does not exist
        """
        link = await self.db.get_link(short_code)
        if link is None:
            raise NotFoundError("Link not found")
        return link

    async def delete_link(self, short_code: str) -> None:
        """Permanently delete a link.

        Raises:
            NotFoundError: If the code does not exist
        """
        if not await self.db.delete_link(short_code):
            raise NotFoundError("Link not found")

        self.logger.info(f"Deleted short link: {short_code}")

    async def health_check(self) -> Dict[str, bool]:
        db_healthy = await self.db.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close storage connections."""
        await self.db.close()
