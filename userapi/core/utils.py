"""
Utility helpers shared across routers/services/stores.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    return not (value or "").strip()


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to UTC. Naive values (SQLite drops tzinfo) are
    assumed to already be UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with a ``Z`` suffix, e.g. ``2013-10-03T00:00:00Z``."""
    text = as_utc(value).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_timestamp(value: str) -> datetime:
    """Inverse of :func:`format_timestamp`; accepts any ISO-8601 offset."""
    text = (value or "").strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))
