"""Persistence ports used by the domain services and use-cases.

Lookups return ``None`` when nothing matches. Writes raise ``ConflictError``
when a storage-level uniqueness rule is violated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from days.domain.entities import Calendar, CalendarEntry, ColorSetting, User
from days.domain.value_objects import CalendarDate, Email, HexColor, Identifier


class UserRepository(ABC):
    @abstractmethod
    async def save(self, user: User) -> None: ...

    @abstractmethod
    async def get_by_id(self, user_id: Identifier) -> User | None: ...

    @abstractmethod
    async def get_by_email(self, email: Email) -> User | None: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    async def list_all(self) -> list[User]: ...

    @abstractmethod
    async def update(self, user: User) -> None: ...

    @abstractmethod
    async def delete(self, user_id: Identifier) -> None: ...

    @abstractmethod
    async def exists_by_email(self, email: Email) -> bool: ...

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool: ...


class CalendarRepository(ABC):
    @abstractmethod
    async def save(self, calendar: Calendar) -> None: ...

    @abstractmethod
    async def get_by_id(self, calendar_id: Identifier) -> Calendar | None: ...

    @abstractmethod
    async def list_by_user(self, user_id: Identifier) -> list[Calendar]: ...

    @abstractmethod
    async def get_by_user_and_name(self, user_id: Identifier, name: str) -> Calendar | None:
        """Case-insensitive lookup of a calendar name within one user's calendars."""

    @abstractmethod
    async def update(self, calendar: Calendar) -> None: ...

    @abstractmethod
    async def delete(self, calendar_id: Identifier) -> None: ...


class ColorSettingRepository(ABC):
    @abstractmethod
    async def save(self, setting: ColorSetting) -> None: ...

    @abstractmethod
    async def get_by_id(self, setting_id: Identifier) -> ColorSetting | None: ...

    @abstractmethod
    async def list_by_calendar(self, calendar_id: Identifier) -> list[ColorSetting]:
        """Settings of one calendar ordered by ``sort_order`` then name."""

    @abstractmethod
    async def get_by_calendar_and_name(self, calendar_id: Identifier, name: str) -> ColorSetting | None: ...

    @abstractmethod
    async def get_by_calendar_and_hex(self, calendar_id: Identifier, hex_color: HexColor) -> ColorSetting | None: ...

    @abstractmethod
    async def update(self, setting: ColorSetting) -> None: ...

    @abstractmethod
    async def delete(self, setting_id: Identifier) -> None: ...


class CalendarEntryRepository(ABC):
    @abstractmethod
    async def save(self, entry: CalendarEntry) -> None: ...

    @abstractmethod
    async def get_by_id(self, entry_id: Identifier) -> CalendarEntry | None: ...

    @abstractmethod
    async def list_by_calendar(self, calendar_id: Identifier) -> list[CalendarEntry]: ...

    @abstractmethod
    async def get_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> CalendarEntry | None: ...

    @abstractmethod
    async def list_by_calendar_and_date_range(
        self,
        calendar_id: Identifier,
        start_date: CalendarDate,
        end_date: CalendarDate,
    ) -> list[CalendarEntry]:
        """Entries with ``start_date <= date <= end_date``, ordered by date."""

    @abstractmethod
    async def list_by_calendar_and_color_setting(
        self,
        calendar_id: Identifier,
        color_setting_id: Identifier,
    ) -> list[CalendarEntry]: ...

    @abstractmethod
    async def exists_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> bool: ...

    @abstractmethod
    async def exists_by_color_setting(self, color_setting_id: Identifier) -> bool: ...

    @abstractmethod
    async def update(self, entry: CalendarEntry) -> None: ...

    @abstractmethod
    async def delete(self, entry_id: Identifier) -> None: ...

    @abstractmethod
    async def delete_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> None: ...
