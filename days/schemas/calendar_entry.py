from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from days.domain.entities import CalendarEntry, ColorSetting
from days.schemas.color_setting import ColorSettingRead
from days.schemas.common import BaseReadModel


class CalendarEntryCreate(BaseModel):
    date: str = Field(max_length=32)
    color_setting_id: UUID
    notes: str | None = Field(default=None, max_length=2000)


class CalendarEntryUpdate(BaseModel):
    color_setting_id: UUID | None = None
    notes: str | None = Field(default=None, max_length=2000)


class CalendarEntryFilters(BaseModel):
    start_date: str | None = None
    end_date: str | None = None
    color_setting_id: UUID | None = None


class CalendarEntryRead(BaseReadModel):
    id: UUID
    user_id: UUID
    calendar_id: UUID
    date: str
    color_setting_id: UUID
    color_setting: ColorSettingRead | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entry: CalendarEntry, color_setting: ColorSetting | None = None) -> CalendarEntryRead:
        return cls(
            id=entry.id.value,
            user_id=entry.user_id.value,
            calendar_id=entry.calendar_id.value,
            date=str(entry.date),
            color_setting_id=entry.color_setting_id.value,
            color_setting=ColorSettingRead.from_entity(color_setting) if color_setting is not None else None,
            notes=entry.notes,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class CalendarEntryList(BaseModel):
    items: list[CalendarEntryRead]
    total: int
    filters: dict[str, Any] = Field(default_factory=dict)
