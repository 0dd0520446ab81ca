"""Synthetic 405 handler.

Every synthetic route is served by a handler built here. The handler
never returns: it raises ``MethodNotAllowed`` and leaves rendering to
the host's error pipeline. Configuration is bound into the closure at
creation time, so handlers are stateless and safe to call concurrently.
"""

from collections.abc import Callable, Sequence
from typing import NoReturn

from methodguard.config import GuardConfig
from methodguard.errors import MethodNotAllowed
from methodguard.http.request import Request


def allow_header_value(supported: Sequence[str], *, allow_head_with_get: bool = False) -> str:
    """Render the ``Allow`` header for a path's supported methods.

    Order follows *supported* and duplicates are kept. With
    *allow_head_with_get*, ``head`` is inserted right after the first
    ``get`` unless the path already lists it::

        allow_header_value(["get", "post"], allow_head_with_get=True)
        # "GET, HEAD, POST"
    """
    methods = [method.lower() for method in supported]
    if allow_head_with_get and "get" in methods and "head" not in methods:
        methods.insert(methods.index("get") + 1, "head")
    return ", ".join(methods).upper()


def make_method_not_allowed_handler(
    supported: Sequence[str],
    config: GuardConfig,
) -> Callable[[Request], NoReturn]:
    """Build the handler for one synthetic route.

    The ``Allow`` value is rendered once from *supported*; later changes
    to the caller's sequence do not leak into responses.
    """
    allow = (
        allow_header_value(supported, allow_head_with_get=config.allow_head_with_get)
        if config.set_allow_header
        else None
    )

    def method_not_allowed(_request: Request) -> NoReturn:
        if allow is None:
            raise MethodNotAllowed()
        raise MethodNotAllowed((allow,))

    return method_not_allowed
