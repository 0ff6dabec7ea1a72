"""Utility script to create the database schema."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from userapi.core.config import get_settings
from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(url: str | None = None) -> None:
    engine = get_engine(url or get_settings().database_url)
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
