"""Return-value conversion — turns handler results into a Response.

``Response`` passes through, ``str`` becomes text, ``bytes`` becomes an
octet stream, ``dict`` and ``list`` become JSON, ``None`` becomes 204.
"""

from typing import Any

from methodguard.http.response import Response


def to_response(value: Any) -> Response:
    """Convert a handler's return value to a Response."""
    match value:
        case Response():
            return value
        case None:
            return Response(status=204)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response.json_body(value)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a Response, str, bytes, dict, or list."
            )
            raise TypeError(msg)
