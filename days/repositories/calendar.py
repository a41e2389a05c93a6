from __future__ import annotations

from sqlalchemy import delete, func, select

from days.core.exceptions import NotFoundError
from days.domain.entities import Calendar
from days.domain.repositories import CalendarRepository
from days.domain.value_objects import Identifier
from days.models import CalendarRecord
from days.repositories.base import SQLRepository

_NAME_CONFLICT = "Calendar with this name already exists"


def _to_entity(record: CalendarRecord) -> Calendar:
    return Calendar(
        id=Identifier.of(record.id),
        user_id=Identifier.of(record.user_id),
        name=record.name,
        description=record.description,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SQLCalendarRepository(SQLRepository, CalendarRepository):
    async def save(self, calendar: Calendar) -> None:
        self.session.add(
            CalendarRecord(
                id=calendar.id.value,
                user_id=calendar.user_id.value,
                name=calendar.name,
                description=calendar.description,
                created_at=calendar.created_at,
                updated_at=calendar.updated_at,
            )
        )
        await self._commit(_NAME_CONFLICT)

    async def get_by_id(self, calendar_id: Identifier) -> Calendar | None:
        record = await self.session.get(CalendarRecord, calendar_id.value)
        return _to_entity(record) if record is not None else None

    async def list_by_user(self, user_id: Identifier) -> list[Calendar]:
        stmt = (
            select(CalendarRecord)
            .where(CalendarRecord.user_id == user_id.value)
            .order_by(CalendarRecord.created_at.asc(), CalendarRecord.name.asc())
        )
        result = await self.session.scalars(stmt)
        return [_to_entity(record) for record in result.all()]

    async def get_by_user_and_name(self, user_id: Identifier, name: str) -> Calendar | None:
        stmt = select(CalendarRecord).where(
            CalendarRecord.user_id == user_id.value,
            func.lower(CalendarRecord.name) == name.strip().lower(),
        )
        record = await self.session.scalar(stmt)
        return _to_entity(record) if record is not None else None

    async def update(self, calendar: Calendar) -> None:
        record = await self.session.get(CalendarRecord, calendar.id.value)
        if record is None:
            raise NotFoundError("Calendar not found")
        record.name = calendar.name
        record.description = calendar.description
        record.updated_at = calendar.updated_at
        await self._commit(_NAME_CONFLICT)

    async def delete(self, calendar_id: Identifier) -> None:
        stmt = delete(CalendarRecord).where(CalendarRecord.id == calendar_id.value)
        await self._commit("Calendar could not be deleted", stmt)
