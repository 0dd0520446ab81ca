"""``methodguard routes`` — list the compiled route table.

Loads the app, freezes it (which runs its plugins), and prints one row
per route. Synthetic 405 routes show ``405 (methodNotAllowed)`` as their
handler so gaps in method coverage are visible at a glance.
"""

import argparse
import importlib
import sys

from methodguard.app import App
from methodguard.errors import ConfigurationError
from methodguard.routing.route import Route

SYNTHETIC_TAG = "methodNotAllowed"


def load_app(target: str) -> App:
    """Load ``"module:attr"`` (``attr`` defaults to ``app``).

    A callable that is not an App is called once as a factory.
    """
    module_name, _, attr = target.partition(":")
    obj = getattr(importlib.import_module(module_name), attr or "app")
    if not isinstance(obj, App) and callable(obj):
        obj = obj()
    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, not a methodguard.App"
        raise TypeError(msg)
    return obj


def _handler_label(route: Route) -> str:
    if SYNTHETIC_TAG in route.tags:
        return f"405 ({SYNTHETIC_TAG})"
    label = getattr(route.handler, "__name__", repr(route.handler))
    return f"{label} ({route.name})" if route.name else label


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, HANDLER rows for ``args.app``; exit 1 if it can't load."""
    try:
        routes = load_app(args.app).routes
    except (ImportError, AttributeError, ValueError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (", ".join(route.methods), route.path, _handler_label(route))
        for route in routes
        if not (args.hide_synthetic and SYNTHETIC_TAG in route.tags)
    ]
    if not rows:
        print("No routes registered.")
        return

    widths = [max(len(row[i]) for row in rows) for i in range(3)]
    method_w, path_w = max(widths[0], 6), max(widths[1], 4)
    print(f"{'METHOD':<{method_w}}  {'PATH':<{path_w}}  HANDLER")
    print("-" * min(method_w + path_w + 4 + widths[2], 80))
    for methods_str, path, label in rows:
        print(f"{methods_str:<{method_w}}  {path:<{path_w}}  {label}")
