"""ASGI response sending — translates a Response into ASGI messages."""

from methodguard._internal.types import Send
from methodguard.http.response import Response


def _body_allowed(status: int, method: str) -> bool:
    """Whether the response may carry a body."""
    # 1xx, 204, 304 and answers to HEAD carry no message body.
    if method == "HEAD":
        return False
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Send *response* through ASGI ``send()``."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    if not _body_allowed(response.status, method):
        body = b""

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
