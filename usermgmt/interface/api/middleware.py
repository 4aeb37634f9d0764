"""HTTP middleware."""

import asyncio
import logging

from fastapi import status
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from usermgmt.interface.api.exception_handlers import (
    REQUEST_TIMEOUT_CODE,
    create_error_response,
)

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware:
    """Bound every HTTP request by a deadline.

    The downstream handler runs inside ``asyncio.wait_for``, so passing the
    deadline cancels the handler itself. Cancellation unwinds the
    request-scoped session without a commit, so a timed-out update is never
    persisted. If the handler had not started its response, the client gets
    504 with code ``REQUEST_TIMEOUT``.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out on %s %s after %ss",
                scope.get("method"),
                scope.get("path"),
                self.timeout_seconds,
            )
            if response_started:
                raise
            response = create_error_response(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                message="Request timed out",
                code=REQUEST_TIMEOUT_CODE,
            )
            await response(scope, receive, send)
