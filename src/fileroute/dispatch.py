"""Request dispatch — match, authorize, invoke.

The dispatcher walks one request through a small state machine::

    Matching -> Matched -> AuthChecking -> Allowed -> Invoking
                                        -> Denied  -> Unauthorized (401)
             -> NotMatched -> NotFound (404)

First-match commitment is absolute: once a route matches, a denied auth
check ends the request even if a later route would also match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from fileroute.auth import AuthDecision, AuthGate
from fileroute.errors import HTTPError, NotFound, Unauthorized
from fileroute.http.request import Request
from fileroute.http.response import Response
from fileroute.routing.matcher import match_route
from fileroute.routing.route import RouteMatch
from fileroute.routing.table import RouteTable
from fileroute.server.executor import HandlerExecutor

logger = logging.getLogger("fileroute.server")


class Outcome(Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    ALLOWED = "allowed"


@dataclass(frozen=True, slots=True)
class Dispatch:
    """Where a request ended up. ``match`` is set unless NOT_FOUND."""

    outcome: Outcome
    match: RouteMatch | None = None


def error_response(error: HTTPError) -> Response:
    """JSON error body ``{"error": detail}`` with the error's status."""
    response = Response.json({"error": error.detail}, status=error.status)
    for name, value in error.headers:
        response = response.with_header(name, value)
    return response


class Dispatcher:
    """Owns the route table for the process lifetime and serves requests.

    All state is fixed at construction; ``dispatch`` keeps nothing between
    calls, so one dispatcher serves concurrent requests safely.
    """

    __slots__ = ("executor", "gate", "prefix", "table")

    def __init__(
        self,
        table: RouteTable,
        gate: AuthGate,
        executor: HandlerExecutor,
        *,
        prefix: str = "/api/",
    ) -> None:
        self.table = table
        self.gate = gate
        self.executor = executor
        self.prefix = prefix

    def resolve(self, method: str, path: str) -> Dispatch:
        """Run matching and the auth check, without side effects."""
        match = match_route(self.table, method, path, prefix=self.prefix)
        if match is None:
            return Dispatch(Outcome.NOT_FOUND)
        if self.gate.check(match.route.auth_rule) is AuthDecision.DENY:
            return Dispatch(Outcome.UNAUTHORIZED, match)
        return Dispatch(Outcome.ALLOWED, match)

    async def dispatch(self, request: Request) -> Response:
        """Serve *request*: a 404, a 401, or the handler's own response."""
        result = self.resolve(request.method, request.encoded_path)

        if result.outcome is Outcome.NOT_FOUND:
            logger.debug("404 %s %s", request.method, request.path)
            return error_response(NotFound())

        assert result.match is not None
        if result.outcome is Outcome.UNAUTHORIZED:
            logger.debug(
                "401 %s %s (auth rule %r)",
                request.method,
                request.path,
                result.match.route.auth_rule,
            )
            return error_response(Unauthorized())

        return await self.executor.execute(
            result.match.route,
            request.with_path_params(result.match.path_params),
        )
