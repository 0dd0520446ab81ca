"""Host application class.

Mutable during setup (routes, error handlers, plugins). Frozen at
runtime when ``__call__()`` or ``table()`` is first invoked; plugins
run during the freeze, after the app's own routes are in the table.
"""

import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from methodguard._internal.types import ErrorHandler, Handler, Receive, Scope, Send
from methodguard.config import AppConfig
from methodguard.routing.route import Route, RouteDescriptor, SyntheticRoute
from methodguard.routing.router import Router
from methodguard.server.handler import handle_request


class Plugin(Protocol):
    """Anything with a ``register(host, options)`` method."""

    def register(self, host: Any, options: Any = None) -> Any: ...


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


@dataclass(slots=True)
class _PendingPlugin:
    """A plugin waiting to run at freeze time."""

    plugin: Plugin
    options: Mapping[str, Any] | None
    prefix: str


class _PluginHost:
    """The view of the app handed to a plugin while the app freezes.

    Reads see the whole table with full paths. Routes added through it
    are placed under the plugin's prefix.
    """

    __slots__ = ("_prefix", "_router")

    def __init__(self, router: Router, prefix: str) -> None:
        self._router = router
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def table(self) -> list[RouteDescriptor]:
        return self._router.table()

    def add_routes(self, routes: Sequence[SyntheticRoute]) -> None:
        for synthetic in routes:
            self._router.add(
                Route(
                    path=self._prefix + synthetic.path,
                    handler=synthetic.handler,
                    methods=tuple(sorted(m.upper() for m in synthetic.methods)),
                    description=synthetic.description,
                    tags=synthetic.tags,
                )
            )


class App:
    """The host application.

    Usage::

        app = App(AppConfig(route_prefix="/api"))

        @app.route("/users", methods=["GET", "POST"])
        def users():
            return []

        app.register(MethodGuard(), {"setAllowHeader": True})

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the router and runs
        plugins, even if several workers call ``__call__()`` at once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_pending_plugins",
        "_pending_routes",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._pending_plugins: list[_PendingPlugin] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._router: Router | None = None

    # -- Registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Exact URL path, relative to ``config.route_prefix``.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name, shown by ``methodguard routes``.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name))
            return func

        return decorator

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def register(
        self,
        plugin: Plugin,
        options: Mapping[str, Any] | None = None,
        *,
        prefix: str | None = None,
    ) -> None:
        """Register a plugin to run when the app freezes.

        Plugins run in registration order and see every route added
        before them. *prefix* defaults to ``config.route_prefix``.
        """
        self._check_not_frozen()
        self._pending_plugins.append(
            _PendingPlugin(plugin, options, self.config.route_prefix if prefix is None else prefix)
        )

    # -- Introspection --

    def table(self) -> list[RouteDescriptor]:
        """Freeze the app and return its route table."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.table()

    @property
    def routes(self) -> list[Route]:
        """Freeze the app and return every compiled route."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        The app freezes at startup, so invalid plugin options fail the
        server before it accepts traffic.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile routes, run plugins, then lock the router.

        MUST only be called while holding _freeze_lock. Nothing is
        published unless every step succeeds.
        """
        router = Router()
        prefix = self.config.route_prefix
        for pending in self._pending_routes:
            methods = dict.fromkeys(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=prefix + pending.path,
                    handler=pending.handler,
                    methods=tuple(methods),
                    name=pending.name,
                )
            )

        for pending_plugin in self._pending_plugins:
            host = _PluginHost(router, pending_plugin.prefix)
            pending_plugin.plugin.register(host, pending_plugin.options)

        router.compile()
        self._router = router
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, error handlers, and plugins before the first request."
            )
            raise RuntimeError(msg)
