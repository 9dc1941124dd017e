"""Roost CLI — inspect and serve component trees.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — declarative route trees built from plain functions.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List a component's routes")
    routes_parser.add_argument("component", help="Import string (e.g. myapp:app)")

    # -- roost run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a component with pounce")
    run_parser.add_argument("component", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--debug", action="store_true", help="Show error details")
    run_parser.add_argument("--reload", action="store_true", help="Reload on file changes")
    run_parser.add_argument("--workers", type=int, default=1, help="Worker count")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from roost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from roost.cli._run import run_component

        run_component(args)
