"""The route table: an immutable, ordered sequence of descriptors.

Order is discovery order and decides precedence: the first descriptor
that matches a request wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Literal

from fileroute.routing.route import RouteDescriptor

if TYPE_CHECKING:
    from fileroute.config import RouterConfig
    from fileroute.routing.cache import RouteCache

logger = logging.getLogger("fileroute.routing")

TableSource = Literal["cache", "scan"]


class RouteTable:
    """Ordered, read-only collection of :class:`RouteDescriptor`.

    Safe to share across concurrent requests: nothing mutates it after
    construction.
    """

    __slots__ = ("_routes", "source")

    def __init__(self, routes: Iterable[RouteDescriptor] = (), *, source: TableSource = "scan") -> None:
        self._routes: tuple[RouteDescriptor, ...] = tuple(routes)
        self.source: TableSource = source

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __getitem__(self, index: int) -> RouteDescriptor:
        return self._routes[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteTable):
            return NotImplemented
        return self._routes == other._routes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RouteTable({len(self._routes)} routes, source={self.source!r})"

    @property
    def routes(self) -> tuple[RouteDescriptor, ...]:
        return self._routes


def build_route_table(config: RouterConfig, *, cache: RouteCache | None = None) -> RouteTable:
    """Build the process route table from the cache or a fresh scan.

    A cache hit is used as-is. On a miss the handler tree is scanned and
    the result stored before returning. With ``config.use_cache`` off the
    cache is neither read nor written.
    """
    from fileroute.routing.cache import RouteCache
    from fileroute.routing.scanner import scan_routes

    if config.use_cache:
        cache = cache or RouteCache(config.cache_path)
        table = cache.load()
        if table is not None:
            logger.info("Route table: %d route(s) from cache %s", len(table), cache.path)
            return table

    table = RouteTable(
        scan_routes(config.handlers_dir, suffix=config.handler_suffix),
        source="scan",
    )
    logger.info("Route table: %d route(s) scanned from %s", len(table), config.handlers_dir)

    if config.use_cache and cache is not None:
        cache.store(table)
    return table
