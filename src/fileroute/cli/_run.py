"""``fileroute run`` — development server command."""

import argparse
import sys

from fileroute.cli._resolve import resolve_or_exit
from fileroute.errors import FileRouteError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, build its route table, and serve it.

    The table is built before the server binds, so a malformed route
    declaration stops startup with an error instead of a running server.
    """
    app = resolve_or_exit(args.app)
    try:
        app._ensure_frozen()
    except FileRouteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from fileroute.server.dev import run_dev_server

    run_dev_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        app_path=args.app,
    )
