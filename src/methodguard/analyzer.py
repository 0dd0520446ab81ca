"""Route-table coverage analysis.

Scans a snapshot of the route table, works out which methods of the
configured universe each path lacks, and synthesizes one 405 route per
path covering exactly those methods.

The scan is a pure transform: the same table and config always yield
the same synthetic routes. With ``GuardConfig.log`` the scan is echoed
to stderr; the echo never affects the result.
"""

import logging
import re
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field

from methodguard.config import GuardConfig
from methodguard.handler import make_method_not_allowed_handler
from methodguard.routing.route import RouteDescriptor, SyntheticRoute

logger = logging.getLogger("methodguard.coverage")


@dataclass(slots=True)
class SupportedMethodSet:
    """Methods observed and still missing for one path. Mutable while scanning only."""

    path: str
    supported_methods: list[str] = field(default_factory=list)
    unsupported_methods: list[str] = field(default_factory=list)

    def observe(self, method: str) -> None:
        """Move *method* from unsupported to supported.

        Only the first matching entry is removed. A method outside the
        universe, or one already observed, leaves ``unsupported_methods``
        untouched but is still recorded as supported.
        """
        if method in self.unsupported_methods:
            self.unsupported_methods.remove(method)
        self.supported_methods.append(method)


class MethodCoverageAnalyzer:
    """Derive synthetic 405 routes from a route table.

    Usage::

        analyzer = MethodCoverageAnalyzer(GuardConfig(set_allow_header=True))
        routes = analyzer.analyze(router.table(), prefix="/api")
    """

    __slots__ = ("config",)

    def __init__(self, config: GuardConfig | None = None) -> None:
        self.config: GuardConfig = config or GuardConfig()

    @property
    def universe(self) -> tuple[str, ...]:
        """The lowercase methods a path is expected to cover."""
        return self.config.methods_to_support

    def coverage(self, routes: Iterable[RouteDescriptor]) -> dict[str, SupportedMethodSet]:
        """Group the table by path, in first-encounter order."""
        paths: dict[str, SupportedMethodSet] = {}
        for route in routes:
            method = route.method.lower()
            entry = paths.get(route.path)
            if entry is None:
                entry = SupportedMethodSet(
                    path=route.path,
                    unsupported_methods=list(self.universe),
                )
                paths[route.path] = entry
            entry.observe(method)
            self._log("%s supports %s", route.path, method)
        return paths

    def analyze(
        self,
        routes: Iterable[RouteDescriptor],
        prefix: str = "",
    ) -> list[SyntheticRoute]:
        """Build one synthetic route per path that lacks any universe method.

        With *prefix*, the literal prefix is stripped from each path so
        the routes can be registered back under that prefix. Paths
        outside the prefix are skipped.
        """
        self._log(
            "Adding 405 responses for routes without methods: %s",
            ",".join(self.universe),
        )
        prefix_re = re.compile(f"^{re.escape(prefix)}(.*)$", re.DOTALL) if prefix else None

        synthetic: list[SyntheticRoute] = []
        for path, entry in self.coverage(routes).items():
            if not entry.unsupported_methods:
                continue

            if prefix_re is None:
                relative = path
            else:
                match = prefix_re.match(path)
                if match is None:
                    logger.debug("Skipping %s: outside route prefix %r", path, prefix)
                    continue
                relative = match.group(1)

            self._log("%s\tadding 405s for: %s", path, ",".join(entry.unsupported_methods))
            supported = tuple(entry.supported_methods)
            synthetic.append(
                SyntheticRoute(
                    path=relative,
                    methods=frozenset(entry.unsupported_methods),
                    supported_methods=supported,
                    handler=make_method_not_allowed_handler(supported, self.config),
                )
            )
        return synthetic

    def _log(self, message: str, *args: object) -> None:
        """Echo one scan event to stderr when ``config.log`` is set."""
        if self.config.log:
            echo(self.config, message % args)


def echo(config: GuardConfig, line: str) -> None:
    """Print a ``| ``-prefixed diagnostic line to stderr if *config* asks for it."""
    if config.log:
        print(f"| {line}", file=sys.stderr)
