"""Domain model and helpers for users."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from userapi.core.utils import as_utc, format_timestamp, is_blank, parse_timestamp


class UserError(Exception):
    """Base exception for the user workflow."""


class InvalidInputError(UserError):
    """Raised when a required value is missing or blank."""


class UserNotFoundError(UserError):
    """Raised when no user matches the given identifier."""

    def __init__(self, user_id: object = None):
        super().__init__(f"User {user_id} not found" if user_id is not None else "User not found")
        self.user_id = user_id


@dataclass
class User:
    id: uuid.UUID
    first_name: str
    last_name: str
    email_address: str
    created_date: datetime

    def copy(self) -> "User":
        return replace(self)

    def to_record(self) -> dict:
        """Plain dict in the on-disk / wire layout (camelCase keys)."""
        return {
            "id": str(self.id),
            "firstName": self.first_name,
            "lastName": self.last_name,
            "emailAddress": self.email_address,
            "createdDate": format_timestamp(self.created_date),
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "User":
        created = data.get("createdDate")
        return cls(
            id=uuid.UUID(str(data["id"])),
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            email_address=data.get("emailAddress") or "",
            created_date=parse_timestamp(created) if isinstance(created, str) else as_utc(created),
        )


def parse_user_id(value: object) -> Optional[uuid.UUID]:
    """Return the UUID for ``value`` or None when it is not a valid identifier."""
    if isinstance(value, uuid.UUID):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return uuid.UUID(text)
    except ValueError:
        return None


def require_fields(**fields: Optional[str]) -> None:
    """Raise InvalidInputError naming every blank field."""
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        raise InvalidInputError(f"{', '.join(missing)} {verb} required.")
