"""fileroute exception hierarchy.

Shared across scanner, cache, dispatcher, and server so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class FileRouteError(Exception):
    """Base for all fileroute-specific errors."""


class ConfigurationError(FileRouteError):
    """Raised when app setup is invalid.

    Typically raised while the app is frozen at startup, or when a handler
    module cannot be turned into a callable.
    """


class RouteDeclarationError(FileRouteError):
    """A handler file declares its route in a malformed way.

    Fatal: aborts the scan, and with it startup.
    """

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid route definition in {path}: {detail}")


class ScanError(FileRouteError):
    """The handler tree could not be walked or read."""


class CacheError(FileRouteError):
    """The route cache could not be written."""


@dataclass(frozen=True, slots=True)
class HTTPError(FileRouteError):
    """An error that maps directly to an HTTP status code.

    Handlers may raise it; the ASGI handler renders it as a JSON error body.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request."""

    def __init__(self, detail: str = "Route not found") -> None:
        super().__init__(status=404, detail=detail)


class Unauthorized(HTTPError):  # noqa: N818
    """401 — the matched route's auth rule was not satisfied."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(status=401, detail=detail)
