"""On-disk route cache.

The scanned route table is stored as JSON and reloaded on the next process
start without touching the handler tree. Nothing here compares the cache
against the handler files: after editing handlers, remove the cache file
(``fileroute cache clear``) and restart.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from fileroute.errors import CacheError, FileRouteError
from fileroute.routing.route import RouteDescriptor
from fileroute.routing.table import RouteTable

logger = logging.getLogger("fileroute.routing")

CACHE_FORMAT_VERSION = 1

# mkstemp creates 0600 files; the cache must be readable by the serving user too
CACHE_FILE_MODE = 0o644


class RouteCache:
    """Load and store a :class:`RouteTable` at a fixed path.

    Usage::

        cache = RouteCache("cache/routes.json")
        table = cache.load()
        if table is None:
            table = RouteTable(scan_routes("routes"))
            cache.store(table)
    """

    __slots__ = ("path",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> RouteTable | None:
        """Return the cached table, or ``None`` if there is none.

        A record that exists but cannot be decoded is logged and treated
        as absent, so the caller rescans and overwrites it.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheError(f"Cannot read route cache {self.path}: {exc}") from exc

        try:
            routes = decode_routes(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError, FileRouteError) as exc:
            logger.warning("Ignoring unreadable route cache %s: %s", self.path, exc)
            return None

        logger.debug("Loaded %d route(s) from %s", len(routes), self.path)
        return RouteTable(routes, source="cache")

    def store(self, table: RouteTable) -> None:
        """Write *table* to the cache path.

        The record is written to a temporary file beside the target and
        moved into place, so a concurrent ``load()`` sees either the old
        record or the complete new one.
        """
        payload = json.dumps(encode_routes(table), indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.chmod(tmp_name, CACHE_FILE_MODE)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CacheError(f"Cannot write route cache {self.path}: {exc}") from exc

        logger.debug("Stored %d route(s) in %s", len(table), self.path)

    def clear(self) -> bool:
        """Remove the cache record. Returns whether one existed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise CacheError(f"Cannot remove route cache {self.path}: {exc}") from exc
        return True


def encode_routes(table: RouteTable) -> dict[str, Any]:
    """Serialize a table to the JSON-ready cache record."""
    return {
        "version": CACHE_FORMAT_VERSION,
        "routes": [
            {
                "template": route.template,
                "methods": sorted(route.methods) if route.methods is not None else None,
                "auth_rule": route.auth_rule,
                "handler_ref": route.handler_ref,
            }
            for route in table
        ],
    }


def decode_routes(record: Any) -> list[RouteDescriptor]:
    """Rebuild descriptors from a cache record.

    Raises ``ValueError`` (or ``KeyError``/``TypeError``) on a record this
    version did not write.
    """
    if not isinstance(record, dict) or record.get("version") != CACHE_FORMAT_VERSION:
        raise ValueError("unsupported cache format")

    routes: list[RouteDescriptor] = []
    for item in record["routes"]:
        methods = item["methods"]
        routes.append(
            RouteDescriptor(
                template=item["template"],
                methods=frozenset(methods) if methods is not None else None,
                auth_rule=item["auth_rule"],
                handler_ref=item["handler_ref"],
            )
        )
    return routes
