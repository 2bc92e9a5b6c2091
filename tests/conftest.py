"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from httpx import ASGITransport, AsyncClient

from config import Config
from shortlinks.database.base import LinkStoreBase
from shortlinks.database.models import Link, SortMode
from shortlinks.errors import ConflictError, StorageError
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


BASE_URL = "http://sho.rt"


class InMemoryLinkStore(LinkStoreBase):
    """Dict-backed stand-in for the links table.

    Ids are never reused. The clock advances one second per write so
    created_at and last_clicked orderings are deterministic.
    """

    def __init__(self):
        super().__init__("memory://")
        self.rows: Dict[str, Link] = {}
        self.next_id = 1
        self.failure: Optional[Exception] = None
        self.closed = False
        self.schema_applied = False
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now

    def _check_failure(self):
        if self.failure is not None:
            raise StorageError("Database operation failed", cause=self.failure)

    async def ensure_schema(self) -> None:
        self.schema_applied = True

    async def create_link(self, short_code: str, original_url: str) -> Link:
        self._check_failure()
        if short_code in self.rows:
            raise ConflictError("That code is already taken")
        link = Link(
            id=self.next_id,
            short_code=short_code,
            original_url=original_url,
            clicks=0,
            created_at=self._tick(),
            last_clicked=None,
        )
        self.next_id += 1
        self.rows[short_code] = link
        return Link(**vars(link))

    def insert_raw(self, short_code: str, original_url: str, clicks: Optional[int]) -> Link:
        """Insert a row bypassing validation, e.g. with NULL clicks."""
        link = Link(
            id=self.next_id,
            short_code=short_code,
            original_url=original_url,
            clicks=clicks,
            created_at=self._tick(),
        )
        self.next_id += 1
        self.rows[short_code] = link
        return link

    async def get_link(self, short_code: str) -> Optional[Link]:
        self._check_failure()
        link = self.rows.get(short_code)
        return Link(**vars(link)) if link else None

    async def short_code_exists(self, short_code: str) -> bool:
        self._check_failure()
        return short_code in self.rows

    async def record_click(self, short_code: str) -> bool:
        self._check_failure()
        link = self.rows.get(short_code)
        if link is None:
            return False
        link.clicks = (link.clicks or 0) + 1
        link.last_clicked = self._tick()
        return True

    async def delete_link(self, short_code: str) -> bool:
        self._check_failure()
        return self.rows.pop(short_code, None) is not None

    async def list_links(
        self,
        search: Optional[str] = None,
        sort: SortMode = SortMode.NEWEST,
    ) -> List[Link]:
        self._check_failure()
        links = list(self.rows.values())

        if search:
            term = search.lower()
            links = [
                link for link in links
                if term in link.short_code.lower() or term in link.original_url.lower()
            ]

        if sort == SortMode.OLDEST:
            links.sort(key=lambda l: (l.created_at, l.id))
        elif sort == SortMode.MOST_CLICKED:
            links.sort(key=lambda l: (l.clicks is None, -(l.clicks or 0), -l.id))
        elif sort == SortMode.LEAST_CLICKED:
            links.sort(key=lambda l: (l.clicks is not None, l.clicks or 0, l.id))
        else:
            links.sort(key=lambda l: (l.created_at, l.id), reverse=True)

        return [Link(**vars(link)) for link in links]

    async def health_check(self) -> bool:
        return self.failure is None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def test_db() -> InMemoryLinkStore:
    return InMemoryLinkStore()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(test_db, short_code_generator, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        db=test_db,
        base_url=BASE_URL,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def app(test_db, service):
    """Create test FastAPI app."""
    config = Config(
        database_url="postgresql://unused@localhost/unused",
        base_url=BASE_URL,
    )
    return create_app(
        db_instance=test_db,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456",
    ]
