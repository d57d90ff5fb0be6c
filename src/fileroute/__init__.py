"""fileroute — convention-based HTTP routing from handler file headers.

Each handler file declares its own route in its first lines::

    # @route /users/:id [GET, PUT]
    # @auth admin_only

    def get(id: int):
        return {"id": id}

Basic usage::

    from fileroute import App, RouterConfig

    app = App(RouterConfig(handlers_dir="routes"))
    app.set_auth_handler(lambda rule: rule == "admin_only")
    app.run()

The route table is scanned once and cached in ``cache/routes.json``.
Clear that cache (``fileroute cache clear myapp:app``) after editing
route headers.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AuthDecision",
    "AuthGate",
    "ConfigurationError",
    "FileRouteError",
    "HTTPError",
    "NotFound",
    "Request",
    "Response",
    "RouteDeclarationError",
    "RouteDescriptor",
    "RouteTable",
    "RouterConfig",
    "Unauthorized",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fileroute`` fast while providing a clean top-level API.
    """
    if name == "App":
        from fileroute.app import App

        return App

    if name == "RouterConfig":
        from fileroute.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from fileroute.http.request import Request

        return Request

    if name == "Response":
        from fileroute.http.response import Response

        return Response

    if name in ("AuthDecision", "AuthGate"):
        from fileroute import auth as _auth

        return getattr(_auth, name)

    if name == "RouteDescriptor":
        from fileroute.routing.route import RouteDescriptor

        return RouteDescriptor

    if name == "RouteTable":
        from fileroute.routing.table import RouteTable

        return RouteTable

    if name == "get_request":
        from fileroute.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "FileRouteError",
        "HTTPError",
        "NotFound",
        "RouteDeclarationError",
        "Unauthorized",
    ):
        from fileroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
