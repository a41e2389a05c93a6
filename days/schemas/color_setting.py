from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from days.domain.entities import ColorSetting
from days.schemas.common import BaseReadModel


class ColorSettingCreate(BaseModel):
    name: str = Field(max_length=255)
    hex_color: str = Field(max_length=16)
    description: str | None = Field(default=None, max_length=1000)
    sort_order: int = Field(default=0, ge=0)
    is_default: bool = False


class ColorSettingUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    hex_color: str | None = Field(default=None, max_length=16)
    description: str | None = Field(default=None, max_length=1000)
    sort_order: int | None = Field(default=None, ge=0)
    is_default: bool | None = None


class ColorSettingRead(BaseReadModel):
    id: UUID
    user_id: UUID
    calendar_id: UUID
    name: str
    hex_color: str
    description: str | None = None
    is_default: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, setting: ColorSetting) -> ColorSettingRead:
        return cls(
            id=setting.id.value,
            user_id=setting.user_id.value,
            calendar_id=setting.calendar_id.value,
            name=setting.name,
            hex_color=setting.hex_color.value,
            description=setting.description,
            is_default=setting.is_default,
            sort_order=setting.sort_order,
            created_at=setting.created_at,
            updated_at=setting.updated_at,
        )
