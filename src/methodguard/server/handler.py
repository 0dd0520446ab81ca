"""ASGI handler — translates ASGI scope/messages to methodguard types.

The only component that touches raw ASGI for HTTP requests. Builds a
Request, dispatches through the router, and sends the Response back.
"""

from collections.abc import Callable
from typing import Any

from methodguard._internal.invoke import invoke
from methodguard._internal.types import Receive, Scope, Send
from methodguard.errors import HTTPError
from methodguard.http.request import Request
from methodguard.http.response import Response
from methodguard.routing.router import Router
from methodguard.server.errors import handle_http_error, handle_internal_error
from methodguard.server.negotiation import to_response
from methodguard.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    response: Response
    try:
        match = router.match(request.method, request.path)
        response = to_response(await invoke(match.route.handler, request))
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, method=request.method)
