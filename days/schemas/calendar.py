from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from days.domain.entities import Calendar
from days.schemas.common import BaseReadModel


class CalendarCreate(BaseModel):
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=1000)


class CalendarUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)


class CalendarRead(BaseReadModel):
    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, calendar: Calendar) -> CalendarRead:
        return cls(
            id=calendar.id.value,
            user_id=calendar.user_id.value,
            name=calendar.name,
            description=calendar.description,
            created_at=calendar.created_at,
            updated_at=calendar.updated_at,
        )
