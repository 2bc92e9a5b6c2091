"""Data models for shortlinks."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from ..common.timestamps import normalize_timestamp


class SortMode(str, Enum):
    """Orderings supported by the link listing."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_CLICKED = "most-clicked"
    LEAST_CLICKED = "least-clicked"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortMode":
        """Map a query-string value to a sort mode, defaulting to newest."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


@dataclass
class Link:
    """A row of the ``links`` table."""

    id: int
    short_code: str
    original_url: str
    clicks: Optional[int]
    created_at: Optional[datetime]
    last_clicked: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to the JSON shape returned by the API."""
        return {
            "id": self.id,
            "short_code": self.short_code,
            "original_url": self.original_url,
            "clicks": self.clicks,
            "created_at": normalize_timestamp(self.created_at),
            "last_clicked": normalize_timestamp(self.last_clicked),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Link":
        """Create from a database record (asyncpg Record or dict)."""
        return cls(
            id=record["id"],
            short_code=record["short_code"],
            original_url=record["original_url"],
            clicks=record["clicks"],
            created_at=record["created_at"],
            last_clicked=record.get("last_clicked"),
        )


@dataclass
class CreatedLink:
    """A newly created link and its fully qualified short URL."""

    link: Link
    short_url: str

    def to_dict(self) -> dict:
        return {"shortUrl": self.short_url, "data": self.link.to_dict()}
