from __future__ import annotations

from sqlalchemy import delete, exists, select

from days.core.exceptions import NotFoundError
from days.domain.entities import User
from days.domain.repositories import UserRepository
from days.domain.value_objects import Email, Identifier
from days.models import UserRecord
from days.repositories.base import SQLRepository


def _to_entity(record: UserRecord) -> User:
    return User(
        id=Identifier.of(record.id),
        email=Email(record.email),
        username=record.username,
        password_hash=record.password_hash,
        first_name=record.first_name,
        last_name=record.last_name,
        timezone=record.timezone,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _apply(record: UserRecord, user: User) -> None:
    record.email = user.email.value
    record.username = user.username
    record.password_hash = user.password_hash
    record.first_name = user.first_name
    record.last_name = user.last_name
    record.timezone = user.timezone
    record.updated_at = user.updated_at


class SQLUserRepository(SQLRepository, UserRepository):
    async def save(self, user: User) -> None:
        record = UserRecord(id=user.id.value, created_at=user.created_at)
        _apply(record, user)
        self.session.add(record)
        await self._commit("User with this email or username already exists")

    async def get_by_id(self, user_id: Identifier) -> User | None:
        record = await self.session.get(UserRecord, user_id.value)
        return _to_entity(record) if record is not None else None

    async def get_by_email(self, email: Email) -> User | None:
        record = await self.session.scalar(select(UserRecord).where(UserRecord.email == email.value))
        return _to_entity(record) if record is not None else None

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(UserRecord).where(UserRecord.username == username.strip().lower())
        record = await self.session.scalar(stmt)
        return _to_entity(record) if record is not None else None

    async def list_all(self) -> list[User]:
        result = await self.session.scalars(select(UserRecord).order_by(UserRecord.created_at.asc()))
        return [_to_entity(record) for record in result.all()]

    async def update(self, user: User) -> None:
        record = await self.session.get(UserRecord, user.id.value)
        if record is None:
            raise NotFoundError("User not found")
        _apply(record, user)
        await self._commit("User with this email or username already exists")

    async def delete(self, user_id: Identifier) -> None:
        stmt = delete(UserRecord).where(UserRecord.id == user_id.value)
        await self._commit("User could not be deleted", stmt)

    async def exists_by_email(self, email: Email) -> bool:
        return bool(await self.session.scalar(select(exists().where(UserRecord.email == email.value))))

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(exists().where(UserRecord.username == username.strip().lower()))
        return bool(await self.session.scalar(stmt))
