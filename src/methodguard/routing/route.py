"""Route, RouteDescriptor, RouteMatch, and SyntheticRoute frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, added to the router at freeze time.
    ``methods`` holds uppercase method names in declaration order.
    """

    path: str
    handler: Callable[..., Any]
    methods: tuple[str, ...]
    name: str | None = None
    description: str = ""
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """One row of the route table: a path and a single lowercase method."""

    path: str
    method: str


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route


@dataclass(frozen=True, slots=True)
class SyntheticRoute:
    """A route generated only to answer 405 for methods a path lacks.

    ``path`` is relative to the registering host's prefix. ``methods``
    holds the lowercase methods the path does not support;
    ``supported_methods`` keeps the observed methods in table order.
    """

    path: str
    methods: frozenset[str]
    supported_methods: tuple[str, ...]
    handler: Callable[..., Any] = field(compare=False)
    description: str = "Method Not Allowed Route"
    tags: tuple[str, ...] = ("methodNotAllowed",)
