"""fileroute application class.

Mutable during setup (auth predicate, executor). Frozen at startup, when
the route table is built — from the cache or a scan of the handler tree —
exactly once per process.
"""

from __future__ import annotations

import threading

import anyio.to_thread

from fileroute._internal.asgi import Receive, Scope, Send
from fileroute.auth import AuthGate, AuthPredicate
from fileroute.config import RouterConfig
from fileroute.dispatch import Dispatcher
from fileroute.errors import ConfigurationError
from fileroute.routing.cache import RouteCache
from fileroute.routing.table import RouteTable, build_route_table
from fileroute.server.executor import HandlerExecutor, ModuleExecutor
from fileroute.server.handler import handle_request


class App:
    """The fileroute application — an ASGI 3 callable.

    Usage::

        app = App(RouterConfig(handlers_dir="routes", cache_dir="cache"))
        app.set_auth_handler(lambda rule: rule == "public")

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread builds the route table, even
        when several workers receive their first request at once. After
        that the table and dispatcher are read-only.
    """

    __slots__ = (
        "_auth_predicate",
        "_dispatcher",
        "_executor",
        "_freeze_lock",
        "_frozen",
        "_routes",
        "config",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        executor: HandlerExecutor | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._executor: HandlerExecutor = executor or ModuleExecutor()
        self._auth_predicate: AuthPredicate | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._routes: RouteTable | None = None
        self._dispatcher: Dispatcher | None = None

    # -- Setup --

    def set_auth_handler(self, predicate: AuthPredicate) -> None:
        """Register the predicate that decides ``@auth`` rules.

        It receives the rule token from the handler header and returns
        ``True`` to allow the request or ``False`` to answer 401.
        """
        self._check_not_frozen()
        self._auth_predicate = predicate

    @property
    def cache(self) -> RouteCache:
        """The route cache at the configured location."""
        return RouteCache(self.config.cache_path)

    @property
    def routes(self) -> RouteTable:
        """The route table, building it on first access."""
        self._ensure_frozen()
        assert self._routes is not None
        return self._routes

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Build the route table and serve with the pounce dev server."""
        self._ensure_frozen()

        from fileroute.server.dev import run_dev_server

        run_dev_server(self, host or self.config.host, port or self.config.port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes
        to the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._dispatcher is not None

        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Builds the route table at startup, before the first HTTP request,
        in a worker thread so the scan does not block the event loop. A
        malformed route declaration fails startup.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await anyio.to_thread.run_sync(self._ensure_frozen)
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the route table and dispatcher.

        MUST only be called while holding _freeze_lock.
        """
        table = build_route_table(self.config, cache=self.cache)
        gate = AuthGate(self._auth_predicate, fail_open=self.config.auth_fail_open)
        self._routes = table
        self._dispatcher = Dispatcher(
            table,
            gate,
            self._executor,
            prefix=self.config.api_prefix,
        )
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after the route table is built. "
                "Register the auth handler before serving requests."
            )
            raise ConfigurationError(msg)
