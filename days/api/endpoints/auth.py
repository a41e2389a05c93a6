from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from days.api.deps import get_auth_service
from days.core.responses import success_response
from days.schemas.auth import LoginRequest
from days.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login")
async def login(payload: LoginRequest, request: Request, service: AuthService = Depends(get_auth_service)):
    data = await service.login(payload)
    return success_response(data=data.model_dump(), request=request)
