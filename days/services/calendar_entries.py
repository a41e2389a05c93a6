from __future__ import annotations

from typing import Any

from days.core.exceptions import NotFoundError, ValidationAppError
from days.domain.entities import CalendarEntry, ColorSetting
from days.domain.repositories import (
    CalendarEntryRepository,
    CalendarRepository,
    ColorSettingRepository,
    UserRepository,
)
from days.domain.services import CalendarDomainService
from days.domain.value_objects import CalendarDate, Identifier
from days.schemas.calendar_entry import (
    CalendarEntryCreate,
    CalendarEntryFilters,
    CalendarEntryList,
    CalendarEntryRead,
    CalendarEntryUpdate,
)


class CalendarEntryService:
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

    async def _read(self, entry: CalendarEntry, setting: ColorSetting | None = None) -> CalendarEntryRead:
        if setting is None:
            setting = await self.color_settings.get_by_id(entry.color_setting_id)
        return CalendarEntryRead.from_entity(entry, setting)

    async def _get_for_date(self, calendar_id: Identifier, date: CalendarDate) -> CalendarEntry:
        entry = await self.entries.get_by_calendar_and_date(calendar_id, date)
        if entry is None:
            raise NotFoundError(f"No entry for {date} in this calendar")
        return entry

    async def create_entry(
        self,
        user_id: Identifier,
        calendar_id: Identifier,
        payload: CalendarEntryCreate,
    ) -> CalendarEntryRead:
        date = CalendarDate.parse(payload.date)
        color_setting_id = Identifier.of(payload.color_setting_id)

        setting = await self.rules.validate_calendar_entry_constraints(user_id, calendar_id, date, color_setting_id)

        entry = CalendarEntry.create(user_id, calendar_id, date, color_setting_id)
        if payload.notes is not None:
            entry.update_notes(payload.notes)

        await self.entries.save(entry)
        return CalendarEntryRead.from_entity(entry, setting)

    async def list_entries(
        self,
        user_id: Identifier,
        calendar_id: Identifier,
        filters: CalendarEntryFilters | None = None,
    ) -> CalendarEntryList:
        """List a calendar's entries.

        A complete date range wins over a color filter. With neither, every
        entry of the calendar is returned.
        """
        await self.rules.validate_calendar_ownership(user_id, calendar_id)
        filters = filters or CalendarEntryFilters()

        applied: dict[str, Any] = {}
        if filters.start_date and filters.end_date:
            start_date = CalendarDate.parse(filters.start_date)
            end_date = CalendarDate.parse(filters.end_date)
            if start_date.after(end_date):
                raise ValidationAppError(
                    "start_date must not be after end_date",
                    details={"start_date": str(start_date), "end_date": str(end_date)},
                )
            items = await self.entries.list_by_calendar_and_date_range(calendar_id, start_date, end_date)
            applied = {"start_date": str(start_date), "end_date": str(end_date)}
        elif filters.color_setting_id is not None:
            color_setting_id = Identifier.of(filters.color_setting_id)
            items = await self.entries.list_by_calendar_and_color_setting(calendar_id, color_setting_id)
            applied = {"color_setting_id": str(color_setting_id)}
        else:
            items = await self.entries.list_by_calendar(calendar_id)

        settings = {setting.id: setting for setting in await self.color_settings.list_by_calendar(calendar_id)}
        data = [CalendarEntryRead.from_entity(item, settings.get(item.color_setting_id)) for item in items]
        return CalendarEntryList(items=data, total=len(data), filters=applied)

    async def get_entry_by_date(self, user_id: Identifier, calendar_id: Identifier, raw_date: str) -> CalendarEntryRead:
        date = CalendarDate.parse(raw_date)
        await self.rules.validate_calendar_ownership(user_id, calendar_id)
        entry = await self._get_for_date(calendar_id, date)
        return await self._read(entry)

    async def get_entry(self, user_id: Identifier, entry_id: Identifier) -> CalendarEntryRead:
        entry = await self.rules.validate_calendar_entry_ownership(user_id, entry_id)
        return await self._read(entry)

    async def update_entry(
        self,
        user_id: Identifier,
        calendar_id: Identifier,
        raw_date: str,
        payload: CalendarEntryUpdate,
    ) -> CalendarEntryRead:
        date = CalendarDate.parse(raw_date)
        await self.rules.validate_calendar_ownership(user_id, calendar_id)
        entry = await self._get_for_date(calendar_id, date)

        setting = None
        if payload.color_setting_id is not None:
            color_setting_id = Identifier.of(payload.color_setting_id)
            setting = await self.rules.validate_calendar_entry_constraints(
                user_id,
                calendar_id,
                date,
                color_setting_id,
                exclude_entry_id=entry.id,
            )
            entry.update_color_setting(color_setting_id)
        if "notes" in payload.model_fields_set:
            entry.update_notes(payload.notes)

        await self.entries.update(entry)
        return await self._read(entry, setting)

    async def delete_entry(self, user_id: Identifier, calendar_id: Identifier, raw_date: str) -> None:
        date = CalendarDate.parse(raw_date)
        await self.rules.validate_calendar_ownership(user_id, calendar_id)
        if not await self.entries.exists_by_calendar_and_date(calendar_id, date):
            raise NotFoundError(f"No entry for {date} in this calendar")
        await self.entries.delete_by_calendar_and_date(calendar_id, date)
