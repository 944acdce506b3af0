"""Request ID middleware.

Forwards a client-supplied X-Request-ID when it is safe to log, otherwise
generates one. The ID is stored on scope["state"], echoed on the response and
exposed to log records through request_id_var. Raw ASGI so streaming responses
are not buffered.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def sanitize_request_id(raw: str | None) -> str:
    """Return raw (stripped) if it is a safe token, else a fresh UUID4."""
    value = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(value):
        return value
    return str(uuid.uuid4())


class RequestIDMiddleware:
    def __init__(self, app: Callable, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    def _incoming(self, scope: dict) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                return value.decode("latin-1")
        return None

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request_id = sanitize_request_id(self._incoming(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((self._header_key, request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        finally:
            request_id_var.reset(token)
