"""The request object handed to dispatch, auth predicates, and handlers.

Everything known when the ASGI scope arrives is frozen into the dataclass.
The body is pulled lazily from ``receive`` the first time a handler asks
for it, and kept so later reads see the same bytes.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import quote

from fileroute._internal.asgi import Receive, Scope
from fileroute.http.headers import Headers
from fileroute.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An incoming HTTP request.

    ``path`` is the raw request path, API prefix included. ``path_params``
    starts empty; once the dispatcher matches a route it hands the handler
    a copy made by :meth:`with_path_params`.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    _receive: Receive
    # Percent-encoded path as sent on the wire; None when built by hand
    raw_path: str | None = None
    # Shared between a request and its with_path_params() copies
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers") or ())),
            query=QueryParams(scope.get("query_string", b"")),
            path_params={},
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            _receive=receive,
            raw_path=_raw_path(scope),
        )

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy of this request bound to a matched route's parameters."""
        return replace(self, path_params=dict(path_params))

    @property
    def encoded_path(self) -> str:
        """The path in percent-encoded form, used for route matching.

        Splitting this (rather than the decoded ``path``) keeps an encoded
        ``%2F`` inside a segment from acting as a separator.
        """
        if self.raw_path is not None:
            return self.raw_path
        return quote(self.path)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent them."""
        if not self.query.raw:
            return self.path
        return f"{self.path}?{self.query.raw.decode('latin-1')}"

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks straight from ``receive``.

        Consumes the body; use :meth:`body` when it must be read twice.
        """
        more_body = True
        while more_body:
            message = await self._receive()
            if message["type"] != "http.request":
                return
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            more_body = message.get("more_body", False)

    async def body(self) -> bytes:
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def text(self, encoding: str = "utf-8") -> str:
        return (await self.body()).decode(encoding)

    async def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` on malformed input."""
        return json.loads(await self.body())


def _raw_path(scope: Scope) -> str:
    raw = scope.get("raw_path")
    if not raw:
        return quote(scope["path"])
    # Some servers leave the query string on raw_path
    return raw.decode("latin-1").partition("?")[0]
