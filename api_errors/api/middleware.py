"""Request correlation for services using the error handlers.

The id is bound to the logging context for the duration of the request, kept
on ``request.state.request_id`` and echoed on the response. Crash responses are
rendered outside this middleware; the exception handlers read the id from
``request.state`` to log and echo it there.
"""

from __future__ import annotations

from uuid import uuid4

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from api_errors.core.logging import REQUEST_ID_HEADER, bind_request_id, reset_request_id


class RequestIDMiddleware:
    """Bind an X-Request-ID to the logging context so reported errors can be traced."""

    header_name = REQUEST_ID_HEADER

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._incoming_id(scope) or uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[self.header_name] = request_id
            await send(message)

        token = bind_request_id(request_id)
        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            reset_request_id(token)

    def _incoming_id(self, scope: Scope) -> str:
        wanted = self.header_name.lower().encode("latin-1")
        for name, value in scope.get("headers", []):
            if name == wanted:
                return value.decode("latin-1").strip()
        return ""


__all__ = ["RequestIDMiddleware"]
