"""
Tag each request with an id for log correlation.

The id comes from ``X-Request-ID`` when the caller sends one and is echoed
back in the response.
"""

import uuid

from devconnect.logging import bind_context, clear_context

REQUEST_ID_HEADER = b"x-request-id"


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        raw = headers.get(REQUEST_ID_HEADER)
        request_id = raw.decode("latin-1") if raw else uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id

        clear_context()
        bind_context(request_id=request_id)

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", []).append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
            await send(message)

        await self.app(scope, receive, send_with_id)
