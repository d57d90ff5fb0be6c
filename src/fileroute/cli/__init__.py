"""fileroute CLI — route listing, cache maintenance, and dev server.

Entry point registered as ``fileroute`` in ``pyproject.toml``::

    [project.scripts]
    fileroute = "fileroute.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``fileroute`` command."""
    parser = argparse.ArgumentParser(
        prog="fileroute",
        description="fileroute — convention-based HTTP routing from handler file headers.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Logging verbosity (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- fileroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the route table in match order")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- fileroute cache --------------------------------------------------
    cache_parser = subparsers.add_parser("cache", help="Manage the on-disk route cache")
    cache_parser.add_argument("action", choices=("clear", "rebuild"), help="Cache action")
    cache_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- fileroute run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from fileroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "cache":
        from fileroute.cli._cache import run_cache

        run_cache(args)
    elif args.command == "run":
        from fileroute.cli._run import run_server

        run_server(args)
