from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from days.domain.entities import User
from days.schemas.common import BaseReadModel


class CreateUserRequest(BaseModel):
    email: str = Field(max_length=320)
    username: str = Field(max_length=64)
    password: str = Field(max_length=128)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    timezone: str | None = Field(default=None, max_length=64)


class UpdateUserRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)
    username: str | None = Field(default=None, max_length=64)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    timezone: str | None = Field(default=None, max_length=64)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(max_length=128)
    new_password: str = Field(max_length=128)


class UserRead(BaseReadModel):
    id: UUID
    email: str
    username: str
    first_name: str | None = None
    last_name: str | None = None
    display_name: str
    timezone: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> UserRead:
        return cls(
            id=user.id.value,
            email=user.email.value,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            display_name=user.display_name,
            timezone=user.timezone,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
