from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from days.api.deps import ensure_self, get_current_user, get_user_service
from days.core.responses import success_response
from days.domain.entities import User
from days.schemas.user import ChangePasswordRequest, CreateUserRequest, UpdateUserRequest, UserRead
from days.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: CreateUserRequest,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    user = await service.create_user(payload)
    return success_response(data=user.model_dump(), request=request)


@router.get("/me")
async def get_me(request: Request, current_user: User = Depends(get_current_user)):
    return success_response(data=UserRead.from_entity(current_user).model_dump(), request=request)


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_user(ensure_self(current_user, user_id))
    return success_response(data=user.model_dump(), request=request)


@router.patch("/{user_id}")
async def update_user(
    user_id: UUID,
    payload: UpdateUserRequest,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_user(ensure_self(current_user, user_id), payload)
    return success_response(data=user.model_dump(), request=request)


@router.post("/{user_id}/password")
async def change_password(
    user_id: UUID,
    payload: ChangePasswordRequest,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.change_password(ensure_self(current_user, user_id), payload)
    return success_response(data={"ok": True}, request=request)


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID,
    request: Request,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(ensure_self(current_user, user_id))
    return success_response(data={"ok": True}, request=request)
