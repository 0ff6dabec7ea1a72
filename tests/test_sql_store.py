"""
Smoke tests for the SQL-backed user store against a temporary SQLite database.
"""
from __future__ import annotations

import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Make the userapi package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userapi.core.config import get_settings  # noqa: E402
from userapi.db import session as db_session  # noqa: E402
from userapi.domain.users import InvalidInputError, User, UserNotFoundError  # noqa: E402
from userapi.repositories import build_store  # noqa: E402
from userapi.repositories.sql_repository import SQLUserStore  # noqa: E402


@pytest.fixture()
def db_url(tmp_path):
    """Temporary SQLite file; engines are disposed so the file is not left locked on Windows."""
    url = f"sqlite:///{tmp_path / 'users.db'}"
    yield url
    try:
        db_session.get_engine(url).dispose()
    except Exception:
        pass
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


def make_user(first: str, month: int) -> User:
    return User(
        id=uuid.uuid4(),
        first_name=first,
        last_name="Sql",
        email_address=f"{first.lower()}@example.com",
        created_date=datetime(2013, month, 1, tzinfo=timezone.utc),
    )


def test_persist_and_reload_keeps_order_and_fields(db_url):
    store = SQLUserStore(db_url)
    first, second = make_user("First", 5), make_user("Second", 3)
    store.add(first)
    store.add(second)
    store.persist()

    reloaded = SQLUserStore(db_url)
    assert [u.id for u in reloaded.snapshot()] == [first.id, second.id]
    assert reloaded.get(first.id) == first
    assert reloaded.get(first.id).created_date.tzinfo is not None


def test_update_and_remove_round_trip(db_url):
    store = SQLUserStore(db_url)
    user, other = make_user("Ana", 1), make_user("Bia", 2)
    store.add(user)
    store.add(other)
    store.persist()

    user.first_name = "Anna"
    store.update(user)
    store.remove(other.id)
    store.persist()

    reloaded = SQLUserStore(db_url)
    assert reloaded.count() == 1
    assert reloaded.get(user.id).first_name == "Anna"
    with pytest.raises(UserNotFoundError):
        reloaded.remove(other.id)


def test_clear_and_persist_empties_table(db_url):
    store = SQLUserStore(db_url)
    store.add(make_user("Ana", 1))
    store.persist()
    store.clear_and_persist()
    assert SQLUserStore(db_url).count() == 0


def test_build_store_picks_sql_backend(db_url, monkeypatch):
    monkeypatch.setenv("USER_STORE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", db_url)
    get_settings.cache_clear()
    try:
        store = build_store(get_settings())
    finally:
        get_settings.cache_clear()
    assert isinstance(store, SQLUserStore)


def test_duplicate_id_is_rejected_and_later_writes_still_persist(db_url):
    store = SQLUserStore(db_url)
    user = make_user("Ana", 1)
    store.add(user)
    with pytest.raises(InvalidInputError):
        store.add(user)
    store.persist()

    other = make_user("Bia", 2)
    store.add(other)
    store.persist()

    reloaded = SQLUserStore(db_url)
    assert [u.id for u in reloaded.snapshot()] == [user.id, other.id]
