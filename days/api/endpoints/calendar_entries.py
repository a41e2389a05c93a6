from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from days.api.deps import get_calendar_entry_service, get_current_user
from days.core.responses import success_response
from days.domain.entities import User
from days.domain.value_objects import Identifier
from days.schemas.calendar_entry import CalendarEntryCreate, CalendarEntryFilters, CalendarEntryUpdate
from days.services.calendar_entries import CalendarEntryService

router = APIRouter(tags=["Calendar entries"])


@router.get("/calendars/{calendar_id}/entries")
async def list_entries(
    calendar_id: UUID,
    request: Request,
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    color_setting_id: UUID | None = Query(default=None),
    current_user: User = Depends(get_current_user),
    service: CalendarEntryService = Depends(get_calendar_entry_service),
):
    filters = CalendarEntryFilters(start_date=start_date, end_date=end_date, color_setting_id=color_setting_id)
    result = await service.list_entries(current_user.id, Identifier.of(calendar_id), filters)
    return success_response(data=result.model_dump(), request=request)


@router.post("/calendars/{calendar_id}/entries", status_code=status.HTTP_201_CREATED)
async def create_entry(
    calendar_id: UUID,
    payload: CalendarEntryCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarEntryService = Depends(get_calendar_entry_service),
):
    item = await service.create_entry(current_user.id, Identifier.of(calendar_id), payload)
    return success_response(data=item.model_dump(), request=request)


@router.get("/calendars/{calendar_id}/entries/{entry_date}")
async def get_entry_by_date(
    calendar_id: UUID,
    entry_date: str,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarEntryService = Depends(get_calendar_entry_service),
):
    item = await service.get_entry_by_date(current_user.id, Identifier.of(calendar_id), entry_date)
    return success_response(data=item.model_dump(), request=request)


@router.patch("/calendars/{calendar_id}/entries/{entry_date}")
async def update_entry(
    calendar_id: UUID,
    entry_date: str,
    payload: CalendarEntryUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarEntryService = Depends(get_calendar_entry_service),
):
    item = await service.update_entry(current_user.id, Identifier.of(calendar_id), entry_date, payload)
    return success_response(data=item.model_dump(), request=request)


@router.delete("/calendars/{calendar_id}/entries/{entry_date}")
async def delete_entry(
    calendar_id: UUID,
    entry_date: str,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarEntryService = Depends(get_calendar_entry_service),
):
    await service.delete_entry(current_user.id, Identifier.of(calendar_id), entry_date)
    return success_response(data={"ok": True}, request=request)


@router.get("/entries/{entry_id}")
async def get_entry(
    entry_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: CalendarEntryService = Depends(get_calendar_entry_service),
):
    item = await service.get_entry(current_user.id, Identifier.of(entry_id))
    return success_response(data=item.model_dump(), request=request)
