"""Error handling pipeline.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or the default JSON error envelope::

    {"statusCode": 405, "error": "Method Not Allowed", "message": "Method Not Allowed"}
"""

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from methodguard._internal.invoke import invoke
from methodguard.errors import HTTPError
from methodguard.http.request import Request
from methodguard.http.response import Response
from methodguard.server.negotiation import to_response

logger = logging.getLogger("methodguard.server")


def reason_phrase(status: int) -> str:
    """Standard reason phrase for *status*, or ``"Unknown"``."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown"


def error_envelope(status: int, message: str) -> dict[str, Any]:
    """The JSON body used for every default error response."""
    return {"statusCode": status, "error": reason_phrase(status), "message": message}


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Map an HTTPError to a Response, keeping the error's headers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    # Exact exception type first, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = to_response(await invoke(handler, request, exc))
        # Keep the error status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        message = exc.detail or reason_phrase(exc.status)
        if debug:
            message = f"{message} ({request.method} {request.path})"
        response = Response.json_body(error_envelope(exc.status, message), status=exc.status)

    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return to_response(await invoke(handler, request, exc))

    message = f"{type(exc).__name__}: {exc}" if debug else "An internal server error occurred"
    return Response.json_body(error_envelope(500, message), status=500)
