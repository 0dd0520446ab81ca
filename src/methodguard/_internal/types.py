"""Shared type aliases for the host: ASGI callables and handlers."""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Message: TypeAlias = MutableMapping[str, Any]
Scope: TypeAlias = Message
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]

# Route handler: takes nothing or the request; synthetic 405 handlers always raise
Handler: TypeAlias = Callable[..., Any]

# Error handler: takes nothing, the request, or (request, exc)
ErrorHandler: TypeAlias = Callable[..., Any]
