"""SQLAlchemy models mirroring the JSON user document."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String

from .session import Base


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    email_address = Column(String(255), nullable=False, default="")
    created_date = Column(DateTime(timezone=True), nullable=False)
