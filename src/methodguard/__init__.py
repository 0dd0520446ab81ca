"""methodguard — answer 405, not 404, for methods a known path doesn't handle.

Scans a route table once at startup and registers a synthetic route per
path covering every method it lacks. Calling one of those methods fails
with ``405 Method Not Allowed``, optionally with an ``Allow`` header.

Basic usage::

    from methodguard import App, MethodGuard

    app = App()

    @app.route("/users", methods=["GET", "POST"])
    def users():
        return []

    app.register(MethodGuard(), {"setAllowHeader": True, "allowHeadWithGet": True})

    # DELETE /users -> 405, Allow: GET, HEAD, POST
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "GuardConfig",
    "HTTPError",
    "MethodCoverageAnalyzer",
    "MethodGuard",
    "MethodGuardError",
    "MethodNotAllowed",
    "NotFound",
    "Request",
    "Response",
    "RouteDescriptor",
    "SyntheticRoute",
    "add_405_routes",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "methodguard.app",
    "AppConfig": "methodguard.config",
    "ConfigurationError": "methodguard.errors",
    "GuardConfig": "methodguard.config",
    "HTTPError": "methodguard.errors",
    "MethodCoverageAnalyzer": "methodguard.analyzer",
    "MethodGuard": "methodguard.plugin",
    "MethodGuardError": "methodguard.errors",
    "MethodNotAllowed": "methodguard.errors",
    "NotFound": "methodguard.errors",
    "Request": "methodguard.http.request",
    "Response": "methodguard.http.response",
    "RouteDescriptor": "methodguard.routing.route",
    "SyntheticRoute": "methodguard.routing.route",
    "add_405_routes": "methodguard.plugin",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import methodguard`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
