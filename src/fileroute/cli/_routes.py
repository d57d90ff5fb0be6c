"""``fileroute routes`` — print the route table in match order."""

import argparse
import sys

from fileroute.cli._resolve import resolve_or_exit
from fileroute.errors import FileRouteError


def run_routes(args: argparse.Namespace) -> None:
    """Build (or load) the app's route table and print it.

    Rows appear in table order, which is match precedence: the first
    row that matches a request serves it.
    """
    app = resolve_or_exit(args.app)
    try:
        table = app.routes
    except FileRouteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not len(table):
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = [
        (
            ", ".join(sorted(route.methods)) if route.methods is not None else "*",
            route.template,
            route.auth_rule or "-",
            route.handler_ref,
        )
        for route in table
    ]
    headers = ("METHOD", "PATH", "AUTH", "HANDLER")
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers[:3])]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row))
    print(f"\n{len(rows)} route(s) from {table.source}")
