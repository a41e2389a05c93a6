from __future__ import annotations

from days.core.exceptions import ConflictError
from days.domain.entities import ColorSetting
from days.domain.repositories import (
    CalendarEntryRepository,
    CalendarRepository,
    ColorSettingRepository,
    UserRepository,
)
from days.domain.services import CalendarDomainService
from days.domain.value_objects import HexColor, Identifier
from days.schemas.color_setting import ColorSettingCreate, ColorSettingRead, ColorSettingUpdate


class ColorSettingService:
    def __init__(
        self,
        users: UserRepository,
        calendars: CalendarRepository,
        color_settings: ColorSettingRepository,
        entries: CalendarEntryRepository,
    ) -> None:
        self.color_settings = color_settings
        self.entries = entries
        self.rules = CalendarDomainService(users, calendars, color_settings, entries)

    async def create_color_setting(
        self,
        user_id: Identifier,
        calendar_id: Identifier,
        payload: ColorSettingCreate,
    ) -> ColorSettingRead:
        await self.rules.validate_calendar_ownership(user_id, calendar_id)

        setting = ColorSetting.create(user_id, calendar_id, payload.name, HexColor.parse(payload.hex_color))
        setting.update_description(payload.description)
        setting.update_sort_order(payload.sort_order)
        setting.set_default(payload.is_default)

        await self.rules.validate_color_setting_unique(calendar_id, setting.name, setting.hex_color)
        await self.color_settings.save(setting)
        return ColorSettingRead.from_entity(setting)

    async def list_color_settings(self, user_id: Identifier, calendar_id: Identifier) -> list[ColorSettingRead]:
        await self.rules.validate_calendar_ownership(user_id, calendar_id)
        items = await self.color_settings.list_by_calendar(calendar_id)
        return [ColorSettingRead.from_entity(item) for item in items]

    async def get_color_setting(self, user_id: Identifier, setting_id: Identifier) -> ColorSettingRead:
        setting = await self.rules.validate_color_setting_ownership(user_id, setting_id)
        return ColorSettingRead.from_entity(setting)

    async def update_color_setting(
        self,
        user_id: Identifier,
        setting_id: Identifier,
        payload: ColorSettingUpdate,
    ) -> ColorSettingRead:
        setting = await self.rules.validate_color_setting_ownership(user_id, setting_id)

        if payload.name is not None:
            setting.rename(payload.name)
        if payload.hex_color is not None:
            setting.update_hex_color(HexColor.parse(payload.hex_color))
        if payload.name is not None or payload.hex_color is not None:
            await self.rules.validate_color_setting_unique(
                setting.calendar_id,
                setting.name,
                setting.hex_color,
                exclude_setting_id=setting.id,
            )
        if "description" in payload.model_fields_set:
            setting.update_description(payload.description)
        if payload.sort_order is not None:
            setting.update_sort_order(payload.sort_order)
        if payload.is_default is not None:
            setting.set_default(payload.is_default)

        await self.color_settings.update(setting)
        return ColorSettingRead.from_entity(setting)

    async def delete_color_setting(self, user_id: Identifier, setting_id: Identifier) -> None:
        await self.rules.validate_color_setting_ownership(user_id, setting_id)
        if await self.entries.exists_by_color_setting(setting_id):
            raise ConflictError(
                "Color setting is still used by calendar entries",
                details={"color_setting_id": str(setting_id)},
            )
        await self.color_settings.delete(setting_id)
