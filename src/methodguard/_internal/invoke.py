"""Invoke helpers — call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``, and may or may not take the
request. The checks live here so callers don't repeat them::

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any) -> Any:
    """Call *handler* with as many of *args* as it accepts, awaiting if needed."""
    result = handler(*args[: _arity(handler, len(args))])
    if inspect.isawaitable(result):
        result = await result
    return result


def _arity(handler: Any, available: int) -> int:
    try:
        params = inspect.signature(handler).parameters.values()
    except (TypeError, ValueError):
        return available
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return available
    positional = [
        p
        for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    return min(len(positional), available)
