"""Immutable HTTP request.

Frozen metadata with async body access. Only what route and error
handlers in this package read is kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from methodguard._internal.types import Receive, Scope


def _decode_headers(raw: Any) -> dict[str, str]:
    """Lowercase header names; the first occurrence of a name wins."""
    headers: dict[str, str] = {}
    for name, value in raw:
        headers.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
    return headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``method`` is uppercase; ``headers`` maps lowercase names to the
    first value sent. The body is read on demand.
    """

    method: str
    path: str
    headers: dict[str, str]

    # Private: ASGI receive callable for the body
    _receive: Receive

    # Private: body cache (the dict is mutable, the field is not)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    async def body(self) -> bytes:
        """Read the full request body. Cached after the first call."""
        if "_body" not in self._cache:
            chunks: list[bytes] = []
            more = True
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._cache["_body"] = b"".join(chunks)
        return self._cache["_body"]

    async def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        return json_module.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=_decode_headers(scope.get("headers", ())),
            _receive=receive,
        )
