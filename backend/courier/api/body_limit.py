"""Request Body Limit — raw ASGI middleware capping inbound body size.

Invariants:
    - A declared Content-Length above the cap → 413 before any body is read
    - A malformed Content-Length → 400
    - Bodies without a declared length (chunked) are counted as they arrive;
      the first chunk past the cap ends the read with 413
    - At most max_body_bytes are ever buffered; accepted bodies are replayed to
      the app unchanged

Design Decisions:
    - Raw ASGI over @app.middleware("http"): the wrapped receive is what the app reads
"""

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                await _reject(400, "Invalid Content-Length header", scope, receive, send)
                return
            if length > self.max_body_bytes:
                await _reject(413, "Request body too large", scope, receive, send)
                return

        messages: list[Message] = []
        received = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_bytes:
                await _reject(413, "Request body too large", scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)


async def _reject(
    status_code: int, message: str, scope: Scope, receive: Receive, send: Send,
) -> None:
    response = JSONResponse(status_code=status_code, content={"message": message})
    await response(scope, receive, send)
