"""
JSON-file persistence for the user collection.

The backing file holds a single document ``{"users": [...]}`` with records
in insertion order. A missing file is treated as an empty collection.
"""

from __future__ import annotations

from pathlib import Path
import json
import os
import tempfile

from userapi.domain.users import User
from userapi.repositories.user_store import StorePersistenceError, UserStore


def load(path: Path) -> dict:
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as f:
                return db_defaults(json.load(f))
        except (OSError, ValueError) as exc:
            raise StorePersistenceError(f"Could not read users from {path}") from exc
    return {"users": []}


def save(path: Path, db: dict) -> None:
    """Write ``db`` next to ``path`` and atomically move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(db, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def db_defaults(db: dict) -> dict:
    if not isinstance(db, dict):
        db = {}
    db.setdefault("users", [])
    return db


class JsonUserStore(UserStore):
    """User collection persisted to a JSON document on disk."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self.reload()

    def describe(self) -> str:
        return str(self.path)

    def _load(self) -> list[User]:
        db = load(self.path)
        try:
            return [User.from_record(record) for record in db["users"]]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StorePersistenceError(f"Malformed user record in {self.path}") from exc

    def _flush(self, users: list[User]) -> None:
        save(self.path, {"users": [user.to_record() for user in users]})
