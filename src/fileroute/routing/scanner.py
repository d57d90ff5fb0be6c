"""Route discovery for the handlers/ directory.

Walks the handler tree breadth-first and reads a small declarative header
from each handler file::

    # @route /users/:id [GET, PUT]
    # @auth admin_only

or the same lines inside a module docstring. Only the head of each file is
read; route metadata must live there.

Header grammar, one rule per line::

    <comment or docstring noise> MARKER <payload>

where MARKER is ``@route`` or ``@auth`` and the payload runs to end of line.
An ``@route`` payload may end in a bracketed, comma-separated method list.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

from fileroute.errors import RouteDeclarationError, ScanError
from fileroute.routing.route import RouteDescriptor

logger = logging.getLogger("fileroute.routing")

# Bytes read from each candidate file. Bounds per-file cost on large trees.
HEADER_BYTES = 256

# Lines of that prefix searched for markers; the header sits at the very top.
HEADER_LINES = 5

ROUTE_MARKER = "@route"
AUTH_MARKER = "@auth"

# A handler file must open with a comment or a module docstring (raw or not).
OPENING_MARKERS = ("#", '"""', "'''", 'r"""', "r'''", 'R"""', "R'''")


def scan_routes(root: str | Path, *, suffix: str = ".py") -> list[RouteDescriptor]:
    """Walk a handler directory and extract every declared route.

    Directories are visited breadth-first and entries within a directory
    in sorted name order, so the result order (which decides match
    precedence) is stable across runs and platforms.

    Args:
        root: Path to the handler directory.
        suffix: File extension that marks a handler file.

    Returns:
        Descriptors in discovery order.

    Raises:
        ScanError: If the root or any directory below it cannot be read, or
            if a directory is reached twice (through a symlink).
        RouteDeclarationError: If any handler declares a malformed route.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise ScanError(f"Handler directory not found: {root_path}")

    routes: list[RouteDescriptor] = []
    pending: deque[Path] = deque([root_path])
    visited: set[Path] = {root_path.resolve()}

    while pending:
        directory = pending.popleft()
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise ScanError(f"Cannot read handler directory {directory}: {exc}") from exc

        for entry in entries:
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                real = entry.resolve()
                if real in visited:
                    # Symlink cycle, or an alias of a directory already walked
                    raise ScanError(f"Handler directory {entry} revisits {real}")
                visited.add(real)
                pending.append(entry)
            elif entry.suffix == suffix:
                route = extract_route(entry)
                if route is not None:
                    routes.append(route)

    logger.debug("Scanned %s: %d route(s)", root_path, len(routes))
    return routes


def extract_route(path: str | Path) -> RouteDescriptor | None:
    """Read one handler file's header and build its descriptor.

    Returns ``None`` when the file is not a handler or declares no route.
    Raises ``RouteDeclarationError`` when it declares one badly.
    """
    file = Path(path)
    head = _read_head(file)

    if not head.startswith(OPENING_MARKERS) or ROUTE_MARKER not in head:
        return None

    lines = head.split("\n")[:HEADER_LINES]
    route_line = _marker_payload(lines, ROUTE_MARKER)
    if not route_line:
        return None

    template, methods = _split_methods(route_line, str(file))
    auth_rule = _marker_payload(lines, AUTH_MARKER) or None

    return RouteDescriptor(
        template=template,
        methods=methods,
        auth_rule=auth_rule,
        handler_ref=str(file),
    )


def _read_head(file: Path) -> str:
    try:
        with file.open("rb") as f:
            raw = f.read(HEADER_BYTES)
    except OSError as exc:
        raise ScanError(f"Cannot read handler file {file}: {exc}") from exc
    # utf-8-sig drops a leading BOM; the cut may land inside a multi-byte character
    return raw.decode("utf-8-sig", errors="replace")


def _marker_payload(lines: list[str], marker: str) -> str | None:
    """Return the trimmed text after *marker* on the first line holding it."""
    for line in lines:
        index = line.find(marker)
        if index != -1:
            return line[index + len(marker) :].strip()
    return None


def _split_methods(route_line: str, handler_ref: str) -> tuple[str, frozenset[str] | None]:
    """Separate a trailing ``[GET, POST]`` list from the template."""
    if not route_line.endswith("]"):
        return route_line, None

    bracket = route_line.rfind("[")
    if bracket == -1:
        raise RouteDeclarationError(handler_ref, f"unmatched ']' in {route_line!r}")

    names = (part.strip().upper() for part in route_line[bracket + 1 : -1].split(","))
    methods = frozenset(name for name in names if name)
    return route_line[:bracket].strip(), methods
