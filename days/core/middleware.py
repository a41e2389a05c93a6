from __future__ import annotations

import asyncio
import logging
from uuid import uuid4

import structlog
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from days.core.exceptions import PayloadTooLargeError
from days.core.responses import error_response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``max_body_bytes`` with a 413 envelope.

    The body is buffered (it is bounded by the limit) and replayed to the app.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        exc = PayloadTooLargeError(details={"max_body_bytes": self.max_body_bytes})
        response = JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.code, exc.message, exc.details, request=Request(scope)),
        )
        await response(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        for name, value in scope.get("headers", []):
            if name == b"content-length" and value.isdigit() and int(value) > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return

        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            size += len(body)
            if size > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        buffered: Message | None = {"type": "http.request", "body": b"".join(chunks), "more_body": False}

        async def replay() -> Message:
            nonlocal buffered
            if buffered is not None:
                message, buffered = buffered, None
                return message
            return await receive()

        await self.app(scope, replay, send)


class RequestTimeoutMiddleware:
    """Cancel requests that run longer than ``timeout_sec`` and answer 504."""

    def __init__(self, app: ASGIApp, timeout_sec: float) -> None:
        self.app = app
        self.timeout_sec = timeout_sec

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, tracking_send), timeout=self.timeout_sec)
        except asyncio.TimeoutError:
            logger.warning("Request timed out", extra={"path": scope.get("path"), "timeout_sec": self.timeout_sec})
            if response_started:
                raise
            response = JSONResponse(
                status_code=504,
                content=error_response(
                    "timeout",
                    "Request timed out",
                    {"timeout_sec": self.timeout_sec},
                    request=Request(scope),
                ),
            )
            await response(scope, receive, send)
