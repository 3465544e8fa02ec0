"""Request body size limit middleware.

Workflow payloads and dataset bodies arrive as JSON; anything larger than
max_bytes is rejected with 413 in the standard error envelope. Declared
Content-Length is checked up front; bodies without one are buffered up to
the limit and replayed to the app. Raw ASGI.
"""

import json
from typing import Callable

from pindown.middleware._asgi import get_header
from pindown.shared.utils.datetime import utc_now


async def _send_413(send: Callable, max_bytes: int) -> None:
    body = json.dumps(
        {
            "success": False,
            "error": {
                "code": "PAYLOAD_TOO_LARGE",
                "type": "validation",
                "message": f"Request body must be at most {max_bytes} bytes",
                "details": {"max_bytes": max_bytes},
                "timestamp": utc_now().isoformat(),
            },
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in ("GET", "HEAD", "OPTIONS"):
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None:
            try:
                if int(declared) > max_bytes:
                    await _send_413(send, max_bytes)
                    return
            except ValueError:
                pass
            await app(scope, receive, send)
            return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            if message["type"] != "http.request":
                continue
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _send_413(send, max_bytes)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        pending = [b"".join(chunks)]

        async def replay_receive() -> dict:
            if not pending:
                return await receive()
            return {"type": "http.request", "body": pending.pop(), "more_body": False}

        await app(scope, replay_receive, send)

    return asgi_app
