"""User collection persisted to a SQL table through SQLAlchemy."""
from __future__ import annotations

import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from userapi.core.utils import as_utc
from userapi.db.models import UserRow
from userapi.db.session import Base, get_engine, get_session
from userapi.domain.users import User
from userapi.repositories.user_store import StorePersistenceError, UserStore


class SQLUserStore(UserStore):
    """
    Same in-memory semantics as the JSON store; ``persist()`` rewrites the
    ``users`` table in one transaction so the table mirrors the list order.
    """

    def __init__(self, database_url: str) -> None:
        super().__init__()
        self.database_url = database_url
        try:
            Base.metadata.create_all(bind=get_engine(database_url))
        except SQLAlchemyError as exc:
            raise StorePersistenceError("Could not prepare the users table") from exc
        self.reload()

    def describe(self) -> str:
        return get_engine(self.database_url).url.render_as_string(hide_password=True)

    def _load(self) -> list[User]:
        try:
            with get_session(self.database_url) as session:
                rows = session.execute(select(UserRow).order_by(UserRow.position)).scalars().all()
                return [_row_to_user(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StorePersistenceError(f"Could not read users from {self.describe()}") from exc

    def _flush(self, users: list[User]) -> None:
        with get_session(self.database_url) as session:
            try:
                session.execute(delete(UserRow))
                session.add_all(_user_to_row(user, position) for position, user in enumerate(users))
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise


def _row_to_user(row: UserRow) -> User:
    return User(
        id=uuid.UUID(row.id),
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        email_address=row.email_address or "",
        created_date=as_utc(row.created_date),
    )


def _user_to_row(user: User, position: int) -> UserRow:
    return UserRow(
        id=str(user.id),
        position=position,
        first_name=user.first_name,
        last_name=user.last_name,
        email_address=user.email_address,
        created_date=user.created_date,
    )
