from __future__ import annotations

import copy
from dataclasses import dataclass, field

from days.api.deps import Repositories
from days.domain.entities import Calendar, CalendarEntry, ColorSetting, User
from days.domain.repositories import (
    CalendarEntryRepository,
    CalendarRepository,
    ColorSettingRepository,
    UserRepository,
)
from days.domain.value_objects import CalendarDate, Email, HexColor, Identifier


@dataclass
class InMemoryStore:
    users: dict[Identifier, User] = field(default_factory=dict)
    calendars: dict[Identifier, Calendar] = field(default_factory=dict)
    color_settings: dict[Identifier, ColorSetting] = field(default_factory=dict)
    entries: dict[Identifier, CalendarEntry] = field(default_factory=dict)

    def drop_calendar(self, calendar_id: Identifier) -> None:
        self.calendars.pop(calendar_id, None)
        for key in [k for k, v in self.color_settings.items() if v.calendar_id == calendar_id]:
            del self.color_settings[key]
        for key in [k for k, v in self.entries.items() if v.calendar_id == calendar_id]:
            del self.entries[key]


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def save(self, user: User) -> None:
        self.store.users[user.id] = copy.deepcopy(user)

    async def get_by_id(self, user_id: Identifier) -> User | None:
        user = self.store.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_by_email(self, email: Email) -> User | None:
        for user in self.store.users.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None

    async def get_by_username(self, username: str) -> User | None:
        for user in self.store.users.values():
            if user.username == username.strip().lower():
                return copy.deepcopy(user)
        return None

    async def list_all(self) -> list[User]:
        return [copy.deepcopy(user) for user in self.store.users.values()]

    async def update(self, user: User) -> None:
        self.store.users[user.id] = copy.deepcopy(user)

    async def delete(self, user_id: Identifier) -> None:
        self.store.users.pop(user_id, None)
        for calendar_id in [k for k, v in self.store.calendars.items() if v.user_id == user_id]:
            self.store.drop_calendar(calendar_id)

    async def exists_by_email(self, email: Email) -> bool:
        return await self.get_by_email(email) is not None

    async def exists_by_username(self, username: str) -> bool:
        return await self.get_by_username(username) is not None


class InMemoryCalendarRepository(CalendarRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def save(self, calendar: Calendar) -> None:
        self.store.calendars[calendar.id] = copy.deepcopy(calendar)

    async def get_by_id(self, calendar_id: Identifier) -> Calendar | None:
        calendar = self.store.calendars.get(calendar_id)
        return copy.deepcopy(calendar) if calendar else None

    async def list_by_user(self, user_id: Identifier) -> list[Calendar]:
        items = [c for c in self.store.calendars.values() if c.user_id == user_id]
        return [copy.deepcopy(c) for c in sorted(items, key=lambda c: (c.created_at, c.name))]

    async def get_by_user_and_name(self, user_id: Identifier, name: str) -> Calendar | None:
        for calendar in self.store.calendars.values():
            if calendar.user_id == user_id and calendar.name.lower() == name.strip().lower():
                return copy.deepcopy(calendar)
        return None

    async def update(self, calendar: Calendar) -> None:
        self.store.calendars[calendar.id] = copy.deepcopy(calendar)

    async def delete(self, calendar_id: Identifier) -> None:
        self.store.drop_calendar(calendar_id)


class InMemoryColorSettingRepository(ColorSettingRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def save(self, setting: ColorSetting) -> None:
        self.store.color_settings[setting.id] = copy.deepcopy(setting)

    async def get_by_id(self, setting_id: Identifier) -> ColorSetting | None:
        setting = self.store.color_settings.get(setting_id)
        return copy.deepcopy(setting) if setting else None

    async def list_by_calendar(self, calendar_id: Identifier) -> list[ColorSetting]:
        items = [s for s in self.store.color_settings.values() if s.calendar_id == calendar_id]
        return [copy.deepcopy(s) for s in sorted(items, key=lambda s: (s.sort_order, s.name))]

    async def get_by_calendar_and_name(self, calendar_id: Identifier, name: str) -> ColorSetting | None:
        for setting in self.store.color_settings.values():
            if setting.calendar_id == calendar_id and setting.name.lower() == name.strip().lower():
                return copy.deepcopy(setting)
        return None

    async def get_by_calendar_and_hex(self, calendar_id: Identifier, hex_color: HexColor) -> ColorSetting | None:
        for setting in self.store.color_settings.values():
            if setting.calendar_id == calendar_id and setting.hex_color == hex_color:
                return copy.deepcopy(setting)
        return None

    async def update(self, setting: ColorSetting) -> None:
        self.store.color_settings[setting.id] = copy.deepcopy(setting)

    async def delete(self, setting_id: Identifier) -> None:
        self.store.color_settings.pop(setting_id, None)


class InMemoryCalendarEntryRepository(CalendarEntryRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _select(self, predicate) -> list[CalendarEntry]:
        items = [e for e in self.store.entries.values() if predicate(e)]
        return [copy.deepcopy(e) for e in sorted(items, key=lambda e: e.date)]

    async def save(self, entry: CalendarEntry) -> None:
        self.store.entries[entry.id] = copy.deepcopy(entry)

    async def get_by_id(self, entry_id: Identifier) -> CalendarEntry | None:
        entry = self.store.entries.get(entry_id)
        return copy.deepcopy(entry) if entry else None

    async def list_by_calendar(self, calendar_id: Identifier) -> list[CalendarEntry]:
        return self._select(lambda e: e.calendar_id == calendar_id)

    async def get_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> CalendarEntry | None:
        found = self._select(lambda e: e.calendar_id == calendar_id and e.date == date)
        return found[0] if found else None

    async def list_by_calendar_and_date_range(
        self,
        calendar_id: Identifier,
        start_date: CalendarDate,
        end_date: CalendarDate,
    ) -> list[CalendarEntry]:
        return self._select(lambda e: e.calendar_id == calendar_id and start_date <= e.date <= end_date)

    async def list_by_calendar_and_color_setting(
        self,
        calendar_id: Identifier,
        color_setting_id: Identifier,
    ) -> list[CalendarEntry]:
        return self._select(lambda e: e.calendar_id == calendar_id and e.color_setting_id == color_setting_id)

    async def exists_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> bool:
        return await self.get_by_calendar_and_date(calendar_id, date) is not None

    async def exists_by_color_setting(self, color_setting_id: Identifier) -> bool:
        return any(e.color_setting_id == color_setting_id for e in self.store.entries.values())

    async def update(self, entry: CalendarEntry) -> None:
        self.store.entries[entry.id] = copy.deepcopy(entry)

    async def delete(self, entry_id: Identifier) -> None:
        self.store.entries.pop(entry_id, None)

    async def delete_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> None:
        for key in [k for k, v in self.store.entries.items() if v.calendar_id == calendar_id and v.date == date]:
            del self.store.entries[key]


def build_repositories(store: InMemoryStore | None = None) -> Repositories:
    store = store or InMemoryStore()
    return Repositories(
        users=InMemoryUserRepository(store),
        calendars=InMemoryCalendarRepository(store),
        color_settings=InMemoryColorSettingRepository(store),
        entries=InMemoryCalendarEntryRepository(store),
    )
