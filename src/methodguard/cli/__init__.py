"""methodguard CLI — route table introspection.

Entry point registered as ``methodguard`` in ``pyproject.toml``::

    [project.scripts]
    methodguard = "methodguard.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``methodguard`` command."""
    parser = argparse.ArgumentParser(
        prog="methodguard",
        description="methodguard — 405 routes for every method a path does not handle.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- methodguard routes -----------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    routes_parser.add_argument(
        "--hide-synthetic",
        action="store_true",
        help="Leave out generated 405 routes",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from methodguard.cli._routes import run_routes

        run_routes(args)
