from __future__ import annotations

from days.core.exceptions import ForbiddenError, NotFoundError, ValidationAppError
from days.domain.entities import Calendar, CalendarEntry, ColorSetting, User
from days.domain.exceptions import AlreadyExistsError
from days.domain.repositories import (
    CalendarEntryRepository,
    CalendarRepository,
    ColorSettingRepository,
    UserRepository,
)
from days.domain.value_objects import CalendarDate, Email, HexColor, Identifier


def _is_other(found_id: Identifier, exclude_id: Identifier | None) -> bool:
    return exclude_id is None or found_id != exclude_id


class UserDomainService:
    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def validate_unique_constraints(
        self,
        email: Email,
        username: str,
        exclude_user_id: Identifier | None = None,
    ) -> None:
        existing = await self.users.get_by_email(email)
        if existing is not None and _is_other(existing.id, exclude_user_id):
            raise AlreadyExistsError("Email already registered", field="email")

        existing = await self.users.get_by_username(username)
        if existing is not None and _is_other(existing.id, exclude_user_id):
            raise AlreadyExistsError("Username already taken", field="username")

    async def validate_user_exists(self, user_id: Identifier | None) -> User:
        if user_id is None:
            raise NotFoundError("User not found")
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user


class CalendarDomainService:
    """Cross-aggregate rules: ownership, per-scope uniqueness and entry constraints."""

    def __init__(
        self,
        users: UserRepository,
        calendars: CalendarRepository,
        color_settings: ColorSettingRepository,
        entries: CalendarEntryRepository,
    ) -> None:
        self.user_rules = UserDomainService(users)
        self.calendars = calendars
        self.color_settings = color_settings
        self.entries = entries

    async def validate_calendar_ownership(self, user_id: Identifier, calendar_id: Identifier) -> Calendar:
        calendar = await self.calendars.get_by_id(calendar_id)
        if calendar is None:
            raise NotFoundError("Calendar not found")
        if not calendar.belongs_to_user(user_id):
            raise ForbiddenError("Calendar belongs to another user")
        return calendar

    async def validate_calendar_name_unique(
        self,
        user_id: Identifier,
        name: str,
        exclude_calendar_id: Identifier | None = None,
    ) -> None:
        existing = await self.calendars.get_by_user_and_name(user_id, name.strip())
        if existing is not None and _is_other(existing.id, exclude_calendar_id):
            raise AlreadyExistsError("Calendar with this name already exists", field="name")

    async def validate_color_setting_unique(
        self,
        calendar_id: Identifier,
        name: str,
        hex_color: HexColor,
        exclude_setting_id: Identifier | None = None,
    ) -> None:
        existing = await self.color_settings.get_by_calendar_and_hex(calendar_id, hex_color)
        if existing is not None and _is_other(existing.id, exclude_setting_id):
            raise AlreadyExistsError("Color is already used in this calendar", field="hex_color")

        existing = await self.color_settings.get_by_calendar_and_name(calendar_id, name.strip())
        if existing is not None and _is_other(existing.id, exclude_setting_id):
            raise AlreadyExistsError("Color setting with this name already exists", field="name")

    async def validate_color_setting_ownership(self, user_id: Identifier, setting_id: Identifier) -> ColorSetting:
        setting = await self.color_settings.get_by_id(setting_id)
        if setting is None:
            raise NotFoundError("Color setting not found")
        if not setting.belongs_to_user(user_id):
            raise ForbiddenError("Color setting belongs to another user")
        return setting

    async def validate_calendar_entry_ownership(self, user_id: Identifier, entry_id: Identifier) -> CalendarEntry:
        entry = await self.entries.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError("Calendar entry not found")
        if not entry.belongs_to_user(user_id):
            raise ForbiddenError("Calendar entry belongs to another user")
        return entry

    async def validate_calendar_entry_constraints(
        self,
        user_id: Identifier,
        calendar_id: Identifier,
        date: CalendarDate,
        color_setting_id: Identifier,
        exclude_entry_id: Identifier | None = None,
    ) -> ColorSetting:
        """Check every rule an entry must satisfy before it is written.

        Returns the referenced color setting.
        """
        await self.user_rules.validate_user_exists(user_id)
        await self.validate_calendar_ownership(user_id, calendar_id)

        setting = await self.validate_color_setting_ownership(user_id, color_setting_id)
        if not setting.belongs_to_calendar(calendar_id):
            raise ValidationAppError(
                "Color setting does not belong to this calendar",
                details={"field": "color_setting_id"},
            )

        existing = await self.entries.get_by_calendar_and_date(calendar_id, date)
        if existing is not None and _is_other(existing.id, exclude_entry_id):
            raise AlreadyExistsError(f"An entry for {date} already exists in this calendar", field="date")
        return setting
