"""
In-memory user collection shared by the file-backed stores.

Records live in an insertion-ordered list; every lookup is a full scan.
Mutations are only visible in memory until ``persist()`` flushes them to the
backing file/database. All access goes through one re-entrant lock, so a
writer holding ``writing()`` can mutate and persist without interleaving with
other writers, and readers always get copies.
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from userapi.domain.users import InvalidInputError, User, UserNotFoundError

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for storage failures."""


class StorePersistenceError(StoreError):
    """Raised when the collection cannot be written to (or read from) its backing file."""


class UserStore:
    """Ordered, lock-guarded collection of users. Subclasses implement ``_load``/``_flush``."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: list[User] = []

    # -------------------------- backend hooks --------------------------
    def _load(self) -> list[User]:
        raise NotImplementedError

    def _flush(self, users: list[User]) -> None:
        raise NotImplementedError

    def reload(self) -> None:
        """Replace the in-memory collection with the persisted state."""
        with self._lock:
            users = list(self._load())
            seen = set()
            for user in users:
                if user.id in seen:
                    raise StorePersistenceError(f"Duplicate user id {user.id} in {self.describe()}")
                seen.add(user.id)
            self._users = users
            logger.debug("Loaded %d users from %s", len(self._users), self.describe())

    def describe(self) -> str:
        return type(self).__name__

    # -------------------------- locking --------------------------
    @contextmanager
    def writing(self) -> Iterator["UserStore"]:
        with self._lock:
            yield self

    # -------------------------- mutations --------------------------
    def add(self, user: Optional[User]) -> User:
        if user is None:
            raise InvalidInputError("There was a problem with your request. Please check your data and try again.")
        with self._lock:
            if self._find(user.id) is not None:
                raise InvalidInputError(f"A user with id {user.id} already exists.")
            self._users.append(user.copy())
        return user

    def update(self, user: Optional[User]) -> Optional[User]:
        if user is None:
            raise InvalidInputError("There was a problem with your request. Please check your data and try again.")
        with self._lock:
            existing = self._find(user.id)
            if existing is None:
                return None
            existing.first_name = user.first_name
            existing.last_name = user.last_name
            existing.email_address = user.email_address
            return existing.copy()

    def remove(self, user_id: uuid.UUID) -> User:
        with self._lock:
            existing = self._find(user_id)
            if existing is None:
                raise UserNotFoundError(user_id)
            self._users.remove(existing)
            return existing.copy()

    def clear(self) -> None:
        with self._lock:
            self._users.clear()

    def persist(self) -> None:
        with self._lock:
            snapshot = self.snapshot()
            try:
                self._flush(snapshot)
            except StoreError:
                raise
            except Exception as exc:
                logger.error("Failed to persist %d users to %s", len(snapshot), self.describe(), exc_info=True)
                raise StorePersistenceError(f"Could not persist users to {self.describe()}") from exc
            logger.debug("Persisted %d users to %s", len(snapshot), self.describe())

    def clear_and_persist(self) -> None:
        with self._lock:
            self.clear()
            self.persist()

    # -------------------------- queries --------------------------
    def get(self, user_id: uuid.UUID) -> Optional[User]:
        with self._lock:
            existing = self._find(user_id)
            return existing.copy() if existing else None

    def query(
        self,
        predicate: Optional[Callable[[User], bool]] = None,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> list[User]:
        """Snapshot of matching users, newest first, paginated by skip/take."""
        with self._lock:
            matches = [user.copy() for user in self._users if predicate is None or predicate(user)]
        matches.sort(key=lambda user: user.created_date, reverse=True)
        start = max(0, skip)
        if take is None:
            return matches[start:]
        return matches[start : start + max(0, take)]

    def list(self, skip: int = 0, take: Optional[int] = None) -> list[User]:
        return self.query(None, skip=skip, take=take)

    def snapshot(self) -> list[User]:
        """Copies of every user in insertion order."""
        with self._lock:
            return [user.copy() for user in self._users]

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _find(self, user_id: uuid.UUID) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None
