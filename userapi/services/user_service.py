"""User use cases (list, lookup, create, update, delete, demo reset)."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

from userapi.core.config import Settings, get_settings
from userapi.core.utils import parse_timestamp, utc_now
from userapi.domain.users import (
    InvalidInputError,
    User,
    UserError,
    UserNotFoundError,
    parse_user_id,
    require_fields,
)
from userapi.repositories.user_store import StoreError, UserStore

__all__ = [
    "DEMO_USERS_FILE",
    "InvalidInputError",
    "UserError",
    "UserNotFoundError",
    "UserService",
    "load_demo_users",
]

logger = logging.getLogger(__name__)

DEMO_USERS_FILE = Path(__file__).resolve().parents[1] / "data" / "demo_users.json"


@lru_cache
def _demo_roster() -> tuple[dict, ...]:
    with DEMO_USERS_FILE.open("r", encoding="utf-8") as f:
        return tuple(json.load(f)["users"])


def load_demo_users() -> list[User]:
    """Fresh User instances for the demo roster, each with a new identifier."""
    return [
        User(
            id=uuid.uuid4(),
            first_name=entry["firstName"],
            last_name=entry["lastName"],
            email_address=entry["emailAddress"],
            created_date=parse_timestamp(entry["createdDate"]),
        )
        for entry in _demo_roster()
    ]


@dataclass
class UserService:
    """Validates requests and delegates to the injected store."""

    store: UserStore
    settings: Settings = field(default_factory=get_settings)

    def list_users(self, page_number: int = 1, page_size: Optional[int] = None) -> list[User]:
        if page_size is None:
            page_size = self.settings.default_page_size
        if page_number < 1:
            raise InvalidInputError("pageNumber must be 1 or greater.")
        if page_size < 1:
            raise InvalidInputError("pageSize must be 1 or greater.")
        cap = self.settings.max_page_size
        if cap and page_size > cap:
            page_size = cap
        return self.store.list(skip=(page_number - 1) * page_size, take=page_size)

    def get_user(self, user_id: object) -> User:
        parsed = parse_user_id(user_id)
        user = self.store.get(parsed) if parsed else None
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        email_address: Optional[str],
    ) -> User:
        require_fields(firstName=first_name, lastName=last_name, emailAddress=email_address)
        user = User(
            id=uuid.uuid4(),
            first_name=first_name,
            last_name=last_name,
            email_address=email_address,
            created_date=utc_now(),
        )
        with self.store.writing() as store:
            store.add(user)
            try:
                store.persist()
            except StoreError:
                store.remove(user.id)
                raise
        logger.info("Created user %s", user.id)
        return user

    def update_user(
        self,
        user_id: object,
        first_name: Optional[str],
        last_name: Optional[str],
        email_address: Optional[str],
    ) -> User:
        parsed = parse_user_id(user_id)
        if parsed is None or parsed.int == 0:
            raise InvalidInputError("id, firstName, lastName and emailAddress are required.")
        require_fields(firstName=first_name, lastName=last_name, emailAddress=email_address)
        changes = User(
            id=parsed,
            first_name=first_name,
            last_name=last_name,
            email_address=email_address,
            created_date=utc_now(),
        )
        with self.store.writing() as store:
            updated = store.update(changes)
            if updated is None:
                raise UserNotFoundError(parsed)
            store.persist()
        logger.info("Updated user %s", parsed)
        return updated

    def delete_user(self, user_id: object) -> bool:
        parsed = parse_user_id(user_id)
        if parsed is None:
            raise UserNotFoundError(user_id)
        with self.store.writing() as store:
            store.remove(parsed)
            store.persist()
        logger.info("Deleted user %s", parsed)
        return True

    def init_demo_users(self) -> bool:
        demo_users = load_demo_users()
        with self.store.writing() as store:
            store.clear_and_persist()
            for user in demo_users:
                store.add(user)
            store.persist()
        logger.info("Reset store to %d demo users", len(demo_users))
        return True

    def count(self) -> int:
        return self.store.count()
