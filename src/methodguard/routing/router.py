"""Exact-path router.

Routes are registered during setup and frozen when the app freezes.
Paths match by exact string; there is no pattern matching. A known
path requested with an unregistered method is answered with 404 like
any unknown path; the method guard plugin fills those gaps with 405
routes.
"""

from methodguard.errors import ConfigurationError, NotFound
from methodguard.routing.route import Route, RouteDescriptor, RouteMatch


class Router:
    """Route table keyed by path, then by uppercase HTTP method.

    Usage::

        router = Router()
        router.add(Route("/users", handler, ("GET", "POST")))
        router.compile()
        match = router.match("GET", "/users")
    """

    __slots__ = ("_by_path", "_compiled", "_routes")

    def __init__(self) -> None:
        # "/users" -> {"GET": route, "POST": route}
        self._by_path: dict[str, dict[str, Route]] = {}
        # Registration order, for table() and introspection
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        if not route.path.startswith("/"):
            msg = f"Route path must start with '/': {route.path!r}"
            raise ConfigurationError(msg)

        by_method = self._by_path.setdefault(route.path, {})
        for method in route.methods:
            if method in by_method:
                existing = by_method[method]
                handler_name = getattr(existing.handler, "__name__", repr(existing.handler))
                msg = (
                    f"Duplicate route {method} {route.path!r}: "
                    f"already handled by {handler_name}."
                )
                raise ConfigurationError(msg)

        for method in route.methods:
            by_method[method] = route
        self._routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    def table(self) -> list[RouteDescriptor]:
        """Return one descriptor per (route, method), in registration order.

        Methods are reported lowercase.
        """
        return [
            RouteDescriptor(path=route.path, method=method.lower())
            for route in self._routes
            for method in route.methods
        ]

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the table.

        ``HEAD`` falls back to the ``GET`` route when no ``HEAD`` route
        is registered. Raises ``NotFound`` when nothing matches.
        """
        by_method = self._by_path.get(path)
        if by_method is None:
            raise NotFound(f"No route matches {method} {path!r}")

        route = by_method.get(method)
        if route is None and method == "HEAD":
            route = by_method.get("GET")
        if route is None:
            raise NotFound(f"No route matches {method} {path!r}")

        return RouteMatch(route=route)
