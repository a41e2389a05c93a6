from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from days.core.exceptions import ForbiddenError, UnauthorizedError
from days.db.session import get_session
from days.domain.entities import User
from days.domain.repositories import (
    CalendarEntryRepository,
    CalendarRepository,
    ColorSettingRepository,
    UserRepository,
)
from days.domain.value_objects import Identifier
from days.repositories.calendar import SQLCalendarRepository
from days.repositories.calendar_entry import SQLCalendarEntryRepository
from days.repositories.color_setting import SQLColorSettingRepository
from days.repositories.user import SQLUserRepository
from days.services.auth import AuthService
from days.services.calendar_entries import CalendarEntryService
from days.services.calendars import CalendarService
from days.services.color_settings import ColorSettingService
from days.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Repositories:
    users: UserRepository
    calendars: CalendarRepository
    color_settings: ColorSettingRepository
    entries: CalendarEntryRepository


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session(request):
        yield session


async def get_repositories(session: AsyncSession = Depends(get_db_session)) -> Repositories:
    return Repositories(
        users=SQLUserRepository(session),
        calendars=SQLCalendarRepository(session),
        color_settings=SQLColorSettingRepository(session),
        entries=SQLCalendarEntryRepository(session),
    )


def get_user_service(repos: Repositories = Depends(get_repositories)) -> UserService:
    return UserService(repos.users)


def get_auth_service(repos: Repositories = Depends(get_repositories)) -> AuthService:
    return AuthService(repos.users)


def get_calendar_service(repos: Repositories = Depends(get_repositories)) -> CalendarService:
    return CalendarService(repos.users, repos.calendars, repos.color_settings, repos.entries)


def get_color_setting_service(repos: Repositories = Depends(get_repositories)) -> ColorSettingService:
    return ColorSettingService(repos.users, repos.calendars, repos.color_settings, repos.entries)


def get_calendar_entry_service(repos: Repositories = Depends(get_repositories)) -> CalendarEntryService:
    return CalendarEntryService(repos.users, repos.calendars, repos.color_settings, repos.entries)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    if credentials is None:
        raise UnauthorizedError("Authorization header missing")
    return await auth.authenticate(credentials.credentials)


def ensure_self(current_user: User, user_id: UUID) -> Identifier:
    target = Identifier.of(user_id)
    if target != current_user.id:
        raise ForbiddenError("You can only access your own account")
    return target
