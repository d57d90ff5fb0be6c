"""Error handling for failures raised inside handlers.

Maps HTTPError exceptions and unexpected failures to JSON Response
objects. The dispatcher's own 404/401 outcomes never get here — they are
ordinary results, not exceptions.
"""

import logging

from fileroute.dispatch import error_response
from fileroute.errors import HTTPError
from fileroute.http.request import Request
from fileroute.http.response import Response

logger = logging.getLogger("fileroute.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError raised by a handler to its JSON error response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    if not exc.detail:
        exc = HTTPError(status=exc.status, detail=f"Error {exc.status}", headers=exc.headers)
    return error_response(exc)


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    body: dict[str, str] = {"error": "Internal Server Error"}
    if debug:
        body["detail"] = repr(exc)
    return Response.json(body, status=500)
