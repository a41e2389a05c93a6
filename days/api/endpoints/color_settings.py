from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from days.api.deps import get_color_setting_service, get_current_user
from days.core.responses import success_response
from days.domain.entities import User
from days.domain.value_objects import Identifier
from days.schemas.color_setting import ColorSettingCreate, ColorSettingUpdate
from days.services.color_settings import ColorSettingService

router = APIRouter(tags=["Color settings"])


@router.get("/calendars/{calendar_id}/color-settings")
async def list_color_settings(
    calendar_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: ColorSettingService = Depends(get_color_setting_service),
):
    items = await service.list_color_settings(current_user.id, Identifier.of(calendar_id))
    return success_response(data=[item.model_dump() for item in items], request=request)


@router.post("/calendars/{calendar_id}/color-settings", status_code=status.HTTP_201_CREATED)
async def create_color_setting(
    calendar_id: UUID,
    payload: ColorSettingCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: ColorSettingService = Depends(get_color_setting_service),
):
    item = await service.create_color_setting(current_user.id, Identifier.of(calendar_id), payload)
    return success_response(data=item.model_dump(), request=request)


@router.get("/color-settings/{setting_id}")
async def get_color_setting(
    setting_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: ColorSettingService = Depends(get_color_setting_service),
):
    item = await service.get_color_setting(current_user.id, Identifier.of(setting_id))
    return success_response(data=item.model_dump(), request=request)


@router.patch("/color-settings/{setting_id}")
async def update_color_setting(
    setting_id: UUID,
    payload: ColorSettingUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: ColorSettingService = Depends(get_color_setting_service),
):
    item = await service.update_color_setting(current_user.id, Identifier.of(setting_id), payload)
    return success_response(data=item.model_dump(), request=request)


@router.delete("/color-settings/{setting_id}")
async def delete_color_setting(
    setting_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: ColorSettingService = Depends(get_color_setting_service),
):
    await service.delete_color_setting(current_user.id, Identifier.of(setting_id))
    return success_response(data={"ok": True}, request=request)
