from __future__ import annotations

from sqlalchemy import delete, func, select

from days.core.exceptions import NotFoundError
from days.domain.entities import ColorSetting
from days.domain.repositories import ColorSettingRepository
from days.domain.value_objects import HexColor, Identifier
from days.models import ColorSettingRecord
from days.repositories.base import SQLRepository

_CONFLICT = "Color setting with this name or color already exists in this calendar"


def _to_entity(record: ColorSettingRecord) -> ColorSetting:
    return ColorSetting(
        id=Identifier.of(record.id),
        user_id=Identifier.of(record.user_id),
        calendar_id=Identifier.of(record.calendar_id),
        name=record.name,
        hex_color=HexColor(record.hex_color),
        description=record.description,
        is_default=record.is_default,
        sort_order=record.sort_order,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _apply(record: ColorSettingRecord, setting: ColorSetting) -> None:
    record.name = setting.name
    record.hex_color = setting.hex_color.value
    record.description = setting.description
    record.is_default = setting.is_default
    record.sort_order = setting.sort_order
    record.updated_at = setting.updated_at


class SQLColorSettingRepository(SQLRepository, ColorSettingRepository):
    async def save(self, setting: ColorSetting) -> None:
        record = ColorSettingRecord(
            id=setting.id.value,
            user_id=setting.user_id.value,
            calendar_id=setting.calendar_id.value,
            created_at=setting.created_at,
        )
        _apply(record, setting)
        self.session.add(record)
        await self._commit(_CONFLICT)

    async def get_by_id(self, setting_id: Identifier) -> ColorSetting | None:
        record = await self.session.get(ColorSettingRecord, setting_id.value)
        return _to_entity(record) if record is not None else None

    async def list_by_calendar(self, calendar_id: Identifier) -> list[ColorSetting]:
        stmt = (
            select(ColorSettingRecord)
            .where(ColorSettingRecord.calendar_id == calendar_id.value)
            .order_by(ColorSettingRecord.sort_order.asc(), ColorSettingRecord.name.asc())
        )
        result = await self.session.scalars(stmt)
        return [_to_entity(record) for record in result.all()]

    async def get_by_calendar_and_name(self, calendar_id: Identifier, name: str) -> ColorSetting | None:
        stmt = select(ColorSettingRecord).where(
            ColorSettingRecord.calendar_id == calendar_id.value,
            func.lower(ColorSettingRecord.name) == name.strip().lower(),
        )
        record = await self.session.scalar(stmt)
        return _to_entity(record) if record is not None else None

    async def get_by_calendar_and_hex(self, calendar_id: Identifier, hex_color: HexColor) -> ColorSetting | None:
        stmt = select(ColorSettingRecord).where(
            ColorSettingRecord.calendar_id == calendar_id.value,
            ColorSettingRecord.hex_color == hex_color.value,
        )
        record = await self.session.scalar(stmt)
        return _to_entity(record) if record is not None else None

    async def update(self, setting: ColorSetting) -> None:
        record = await self.session.get(ColorSettingRecord, setting.id.value)
        if record is None:
            raise NotFoundError("Color setting not found")
        _apply(record, setting)
        await self._commit(_CONFLICT)

    async def delete(self, setting_id: Identifier) -> None:
        stmt = delete(ColorSettingRecord).where(ColorSettingRecord.id == setting_id.value)
        await self._commit("Color setting is still used by calendar entries", stmt)
