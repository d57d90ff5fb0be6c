"""``fileroute cache`` — clear or rebuild the on-disk route cache.

The running router never notices edited handler files; after changing a
``@route`` or ``@auth`` header, clear the cache and restart.
"""

import argparse
import sys

from fileroute.cli._resolve import resolve_or_exit
from fileroute.errors import FileRouteError


def run_cache(args: argparse.Namespace) -> None:
    app = resolve_or_exit(args.app)
    cache = app.cache

    if args.action == "rebuild" and not app.config.use_cache:
        print(f"Route cache disabled (use_cache=False); nothing written to {cache.path}")
        return

    try:
        removed = cache.clear()
        if args.action == "clear":
            status = "removed" if removed else "no cache at"
            print(f"Route cache {status} {cache.path}")
            return

        table = app.routes
    except FileRouteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"Rebuilt route cache {cache.path}: {len(table)} route(s)")
