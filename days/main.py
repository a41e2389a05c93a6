from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from days.api.router import api_router
from days.core.config import Settings, get_settings
from days.core.exceptions import AppError
from days.core.logging import configure_logging
from days.core.middleware import BodySizeLimitMiddleware, RequestIDMiddleware, RequestTimeoutMiddleware
from days.core.responses import error_response, success_response
from days.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


def _sanitize_json(value):
    if isinstance(value, str):
        # Lone surrogates from JSON escapes cannot be rendered as UTF-8.
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    if isinstance(value, dict):
        return {_sanitize_json(key): _sanitize_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_sanitize_json(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_sanitize_json(item) for item in value)
    if isinstance(value, (Exception, bytes)):
        return _sanitize_json(str(value))
    return value


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.code, exc.message, exc.details, request=request),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response("http_error", message, request=request),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        sanitized_errors = _sanitize_json(exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_response(
                "validation_error",
                "Request validation failed",
                {"errors": sanitized_errors},
                request=request,
            ),
        )

    @app.exception_handler(Exception)
    async def unknown_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_response("internal_error", "Internal server error", request=request),
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        engine = build_engine(settings)
        app.state.session_factory = build_session_factory(engine)
        logger.info("Application startup", extra={"env": settings.env})
        yield
        await engine.dispose()
        logger.info("Application shutdown")

    app = FastAPI(
        title=settings.project_name,
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Login and access tokens"},
            {"name": "Users", "description": "Registration and account settings"},
            {"name": "Calendars", "description": "User calendars"},
            {"name": "Color settings", "description": "Colors and their meaning per calendar"},
            {"name": "Calendar entries", "description": "One colored entry per calendar day"},
        ],
    )

    app.add_middleware(RequestTimeoutMiddleware, timeout_sec=settings.request_timeout_sec)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials="*" not in settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["Health"])
    async def health(request: Request):
        return success_response(data={"status": "ok"}, request=request)

    register_exception_handlers(app)
    return app


app = create_app()
