from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from days.api.deps import get_calendar_service, get_current_user
from days.core.responses import success_response
from days.domain.entities import User
from days.domain.value_objects import Identifier
from days.schemas.calendar import CalendarCreate, CalendarUpdate
from days.services.calendars import CalendarService

router = APIRouter(prefix="/calendars", tags=["Calendars"])


@router.get("")
async def list_calendars(
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    items = await service.list_calendars(current_user.id)
    return success_response(data=[item.model_dump() for item in items], request=request)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_calendar(
    payload: CalendarCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    item = await service.create_calendar(current_user.id, payload)
    return success_response(data=item.model_dump(), request=request)


@router.get("/{calendar_id}")
async def get_calendar(
    calendar_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    item = await service.get_calendar(current_user.id, Identifier.of(calendar_id))
    return success_response(data=item.model_dump(), request=request)


@router.put("/{calendar_id}")
async def update_calendar(
    calendar_id: UUID,
    payload: CalendarUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    item = await service.update_calendar(current_user.id, Identifier.of(calendar_id), payload)
    return success_response(data=item.model_dump(), request=request)


@router.delete("/{calendar_id}")
async def delete_calendar(
    calendar_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    await service.delete_calendar(current_user.id, Identifier.of(calendar_id))
    return success_response(data={"ok": True}, request=request)
