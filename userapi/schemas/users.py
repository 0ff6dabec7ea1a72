"""
Pydantic models for the user endpoints.

This is the serialization boundary: the wire format uses camelCase field
names, the domain model uses snake_case. Request fields are optional here
on purpose; presence checks happen in ``UserService`` so that a missing
field answers 400 with the same message as a blank one.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from userapi.core.utils import format_timestamp
from userapi.domain.users import User


class UserWrite(BaseModel):
    """Body of ``POST /user`` and ``PUT /user/{id}``. On PUT a body ``id`` must match the URL."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, examples=["5f0c7e8a-1b2c-4d3e-8f90-a1b2c3d4e5f6"])
    first_name: Optional[str] = Field(None, alias="firstName", examples=["Howard"])
    last_name: Optional[str] = Field(None, alias="lastName", examples=["Cummings"])
    email_address: Optional[str] = Field(None, alias="emailAddress", examples=["howard@example.com"])


class UserRead(BaseModel):
    """Serialized user as returned by every endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email_address: str = Field(alias="emailAddress")
    created_date: datetime = Field(alias="createdDate")

    @field_serializer("created_date")
    def _serialize_created_date(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email_address=user.email_address,
            created_date=user.created_date,
        )
