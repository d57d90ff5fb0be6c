"""Development server.

Starts a pounce ASGI server with the live fileroute App object.
Single worker, no reload: the route table is built once per process.
"""

from __future__ import annotations


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    app_path: str | None = None,
) -> None:
    """Start a pounce server with the given fileroute App.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we hold a live ``App`` object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Args:
        app: ASGI callable (fileroute App instance).
        host: Bind host address.
        port: Bind port number.
        app_path: Optional ``"module:attribute"`` import string, forwarded
            to pounce.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=False)
    server = Server(config, app, app_path=app_path)
    server.run()
