from __future__ import annotations

from sqlalchemy import delete, exists, select

from days.core.exceptions import NotFoundError
from days.domain.entities import CalendarEntry
from days.domain.repositories import CalendarEntryRepository
from days.domain.value_objects import CalendarDate, Identifier
from days.models import CalendarEntryRecord
from days.repositories.base import SQLRepository

_DATE_CONFLICT = "An entry for this date already exists in this calendar"


def _to_entity(record: CalendarEntryRecord) -> CalendarEntry:
    return CalendarEntry(
        id=Identifier.of(record.id),
        user_id=Identifier.of(record.user_id),
        calendar_id=Identifier.of(record.calendar_id),
        date=CalendarDate(record.entry_date),
        color_setting_id=Identifier.of(record.color_setting_id),
        notes=record.notes,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SQLCalendarEntryRepository(SQLRepository, CalendarEntryRepository):
    async def _list(self, *criteria) -> list[CalendarEntry]:
        stmt = select(CalendarEntryRecord).where(*criteria).order_by(CalendarEntryRecord.entry_date.asc())
        result = await self.session.scalars(stmt)
        return [_to_entity(record) for record in result.all()]

    async def save(self, entry: CalendarEntry) -> None:
        self.session.add(
            CalendarEntryRecord(
                id=entry.id.value,
                user_id=entry.user_id.value,
                calendar_id=entry.calendar_id.value,
                color_setting_id=entry.color_setting_id.value,
                entry_date=entry.date.date,
                notes=entry.notes,
                created_at=entry.created_at,
                updated_at=entry.updated_at,
            )
        )
        await self._commit(_DATE_CONFLICT)

    async def get_by_id(self, entry_id: Identifier) -> CalendarEntry | None:
        record = await self.session.get(CalendarEntryRecord, entry_id.value)
        return _to_entity(record) if record is not None else None

    async def list_by_calendar(self, calendar_id: Identifier) -> list[CalendarEntry]:
        return await self._list(CalendarEntryRecord.calendar_id == calendar_id.value)

    async def get_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> CalendarEntry | None:
        stmt = select(CalendarEntryRecord).where(
            CalendarEntryRecord.calendar_id == calendar_id.value,
            CalendarEntryRecord.entry_date == date.date,
        )
        record = await self.session.scalar(stmt)
        return _to_entity(record) if record is not None else None

    async def list_by_calendar_and_date_range(
        self,
        calendar_id: Identifier,
        start_date: CalendarDate,
        end_date: CalendarDate,
    ) -> list[CalendarEntry]:
        return await self._list(
            CalendarEntryRecord.calendar_id == calendar_id.value,
            CalendarEntryRecord.entry_date >= start_date.date,
            CalendarEntryRecord.entry_date <= end_date.date,
        )

    async def list_by_calendar_and_color_setting(
        self,
        calendar_id: Identifier,
        color_setting_id: Identifier,
    ) -> list[CalendarEntry]:
        return await self._list(
            CalendarEntryRecord.calendar_id == calendar_id.value,
            CalendarEntryRecord.color_setting_id == color_setting_id.value,
        )

    async def exists_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> bool:
        stmt = select(
            exists().where(
                CalendarEntryRecord.calendar_id == calendar_id.value,
                CalendarEntryRecord.entry_date == date.date,
            )
        )
        return bool(await self.session.scalar(stmt))

    async def exists_by_color_setting(self, color_setting_id: Identifier) -> bool:
        stmt = select(exists().where(CalendarEntryRecord.color_setting_id == color_setting_id.value))
        return bool(await self.session.scalar(stmt))

    async def update(self, entry: CalendarEntry) -> None:
        record = await self.session.get(CalendarEntryRecord, entry.id.value)
        if record is None:
            raise NotFoundError("Calendar entry not found")
        record.color_setting_id = entry.color_setting_id.value
        record.entry_date = entry.date.date
        record.notes = entry.notes
        record.updated_at = entry.updated_at
        await self._commit(_DATE_CONFLICT)

    async def delete(self, entry_id: Identifier) -> None:
        stmt = delete(CalendarEntryRecord).where(CalendarEntryRecord.id == entry_id.value)
        await self._commit("Calendar entry could not be deleted", stmt)

    async def delete_by_calendar_and_date(self, calendar_id: Identifier, date: CalendarDate) -> None:
        stmt = delete(CalendarEntryRecord).where(
            CalendarEntryRecord.calendar_id == calendar_id.value,
            CalendarEntryRecord.entry_date == date.date,
        )
        await self._commit("Calendar entry could not be deleted", stmt)
