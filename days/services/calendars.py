from __future__ import annotations

import logging

from days.domain.entities import Calendar
from days.domain.repositories import (
    CalendarEntryRepository,
    CalendarRepository,
    ColorSettingRepository,
    UserRepository,
)
from days.domain.services import CalendarDomainService
from days.domain.value_objects import Identifier
from days.schemas.calendar import CalendarCreate, CalendarRead, CalendarUpdate

logger = logging.getLogger(__name__)


class CalendarService:
    def __init__(
        self,
        users: UserRepository,
        calendars: CalendarRepository,
        color_settings: ColorSettingRepository,
        entries: CalendarEntryRepository,
    ) -> None:
        self.calendars = calendars
        self.rules = CalendarDomainService(users, calendars, color_settings, entries)

    async def create_calendar(self, user_id: Identifier, payload: CalendarCreate) -> CalendarRead:
        await self.rules.user_rules.validate_user_exists(user_id)
        calendar = Calendar.create(user_id, payload.name, payload.description)
        await self.rules.validate_calendar_name_unique(user_id, calendar.name)
        await self.calendars.save(calendar)
        logger.info("Calendar created", extra={"user_id": str(user_id), "calendar_id": str(calendar.id)})
        return CalendarRead.from_entity(calendar)

    async def list_calendars(self, user_id: Identifier) -> list[CalendarRead]:
        items = await self.calendars.list_by_user(user_id)
        return [CalendarRead.from_entity(item) for item in items]

    async def get_calendar(self, user_id: Identifier, calendar_id: Identifier) -> CalendarRead:
        calendar = await self.rules.validate_calendar_ownership(user_id, calendar_id)
        return CalendarRead.from_entity(calendar)

    async def update_calendar(self, user_id: Identifier, calendar_id: Identifier, payload: CalendarUpdate) -> CalendarRead:
        calendar = await self.rules.validate_calendar_ownership(user_id, calendar_id)

        if payload.name is not None:
            previous_name = calendar.name
            calendar.rename(payload.name)
            if calendar.name.lower() != previous_name.lower():
                await self.rules.validate_calendar_name_unique(user_id, calendar.name, exclude_calendar_id=calendar.id)
        if "description" in payload.model_fields_set:
            calendar.update_description(payload.description)

        await self.calendars.update(calendar)
        return CalendarRead.from_entity(calendar)

    async def delete_calendar(self, user_id: Identifier, calendar_id: Identifier) -> None:
        await self.rules.validate_calendar_ownership(user_id, calendar_id)
        await self.calendars.delete(calendar_id)
        logger.info("Calendar deleted", extra={"user_id": str(user_id), "calendar_id": str(calendar_id)})
