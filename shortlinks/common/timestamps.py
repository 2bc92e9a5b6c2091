"""Timestamp normalization for API output."""

from datetime import datetime, timezone
from typing import Any, Optional


def normalize_timestamp(value: Any) -> Optional[str]:
    """Render a storage timestamp as an ISO-8601 UTC string.

    Naive datetimes are taken to be UTC already. Strings coming back from
    drivers that do not decode timestamps get a ``T`` separator and a ``Z``
    suffix if they lack one.

    Args:
        value: datetime, string or None

    Returns:
        String like ``2024-05-01T12:00:00.000Z`` or None
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    text = str(value).replace(" ", "T", 1)
    return text if text.endswith("Z") else f"{text}Z"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
