"""ASGI middleware for the NFT Mint API.

:class:`BodySizeLimitMiddleware` caps request bodies at a byte limit.  A
declared ``Content-Length`` over the limit is rejected before the app runs;
bodies without one (chunked transfer) are counted as they are received and
rejected as soon as the running total passes the limit, so the route handler
never sees a partial body and no upstream call is made.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class BodyTooLarge(HTTPException):
    """Raised from ``receive`` once the streamed body exceeds the limit.

    Subclasses ``HTTPException`` so FastAPI's body parsing re-raises it
    unchanged instead of converting it into a 400.
    """

    def __init__(self) -> None:
        super().__init__(status_code=413, detail="Request body too large")


class BodySizeLimitMiddleware:
    """Reject HTTP requests whose body exceeds ``max_body_bytes``.

    Args:
        app: The wrapped ASGI application.
        max_body_bytes: Largest accepted body in bytes.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    exceeded = True
                    raise BodyTooLarge()
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Once the limit is hit the app's own error response is dropped
            # in favour of the 413 body sent below.
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except BodyTooLarge:
            pass

        if exceeded and not response_started:
            await self._reject(scope, receive, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger.warning(f"Rejected request body over {self.max_body_bytes} bytes: {scope.get('path')}")
        response = JSONResponse(status_code=413, content={"error": "Request body too large"})
        await response(scope, receive, send)
