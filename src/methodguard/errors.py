"""methodguard exception hierarchy.

Shared across the analyzer, plugin, router, and request pipeline so
every module raises and catches the same types.
"""

from collections.abc import Iterable
from dataclasses import dataclass


class MethodGuardError(Exception):
    """Base for all methodguard errors."""


class ConfigurationError(MethodGuardError):
    """Raised when plugin options or app configuration are invalid.

    Surfaces while the app freezes, before any request is served.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(MethodGuardError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or handlers. The request pipeline catches
    these and renders the JSON error envelope.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — the path exists but not for this HTTP method.

    The ``Allow`` header is only attached when *allowed* is given. The
    value keeps the order of *allowed*; callers decide case and order.
    """

    def __init__(self, allowed: Iterable[str] | None = None, detail: str = "") -> None:
        headers: tuple[tuple[str, str], ...] = ()
        if allowed is not None:
            headers = (("Allow", ", ".join(allowed)),)
        super().__init__(
            status=405,
            detail=detail or "Method Not Allowed",
            headers=headers,
        )
