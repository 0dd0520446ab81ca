"""Method guard plugin — registers 405 routes on a host.

The plugin only needs three things from its host: the route table, the
prefix its routes are registered under, and a way to add routes. Any
object providing them satisfies ``RouteHost``; the bundled ``App``
hands plugins such a view while it freezes.

Usage::

    app = App()
    app.register(MethodGuard(), {"setAllowHeader": True, "allowHeadWithGet": True})
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from methodguard.analyzer import MethodCoverageAnalyzer, echo
from methodguard.config import GuardConfig
from methodguard.routing.route import RouteDescriptor, SyntheticRoute


@runtime_checkable
class RouteHost(Protocol):
    """The part of a host router the plugin reads from and writes to."""

    @property
    def prefix(self) -> str: ...

    def table(self) -> list[RouteDescriptor]: ...

    def add_routes(self, routes: Sequence[SyntheticRoute]) -> None: ...


class MethodGuard:
    """Plugin that answers unsupported methods on known paths with 405."""

    name = "methodguard"

    def register(
        self,
        host: RouteHost,
        options: Mapping[str, Any] | GuardConfig | None = None,
    ) -> list[SyntheticRoute]:
        """Validate *options*, analyze the host's table, and add the 405 routes.

        Raises ``ConfigurationError`` for invalid options before the
        table is read. Returns the routes handed to the host.
        """
        config = GuardConfig.from_options(options)
        routes = MethodCoverageAnalyzer(config).analyze(host.table(), prefix=host.prefix)
        echo(config, f'Adding {len(routes)} new "Method Not Allowed" routes')
        host.add_routes(routes)
        return routes


def add_405_routes(
    routes: Iterable[RouteDescriptor],
    config: GuardConfig | None = None,
    prefix: str = "",
) -> list[SyntheticRoute]:
    """Compute the synthetic 405 routes for a table without touching a host."""
    return MethodCoverageAnalyzer(config).analyze(routes, prefix=prefix)
