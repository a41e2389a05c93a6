from fastapi import APIRouter

from days.api.endpoints import auth, calendar_entries, calendars, color_settings, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(calendars.router)
api_router.include_router(color_settings.router)
api_router.include_router(calendar_entries.router)
