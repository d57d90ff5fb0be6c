"""In-process test client.

Drives an App through its ASGI interface and hands back the same
``Response`` type handlers produce, so assertions read the same in tests
and in handler code.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import unquote, urlencode

from fileroute.app import App
from fileroute.http.response import Response


class TestClient:
    """Async client that calls the app directly, no sockets.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/api/users/42")
            assert response.status == 200
            assert response.json_body() == {"id": 42}

    Entering the context builds the route table, so a malformed route
    header fails the test at setup rather than on the first request.
    """

    __test__ = False  # not a pytest test class

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def get(self, path: str, **kwargs: Any) -> Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Response:
        return await self.request("DELETE", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        body: bytes = b"",
        json: Any = None,
    ) -> Response:
        """Send one request through the app and collect its response.

        ``params`` is appended to any query string already in *path*.
        ``json`` serializes a body and sets ``content-type`` unless
        *headers* already does.
        """
        header_map = {name.lower(): value for name, value in (headers or {}).items()}
        if json is not None:
            body = _json_dumps(json)
            header_map.setdefault("content-type", "application/json")

        scope = _build_scope(method, path, header_map, params)
        pending = [{"type": "http.request", "body": body, "more_body": False}]

        async def receive() -> dict[str, Any]:
            if pending:
                return pending.pop()
            return {"type": "http.disconnect"}

        collector = _ResponseCollector()
        await self.app(scope, receive, collector.send)
        return collector.response()


def _json_dumps(value: Any) -> bytes:
    return json.dumps(value).encode("utf-8")


def _build_scope(
    method: str,
    path: str,
    headers: dict[str, str],
    params: dict[str, str] | None,
) -> dict[str, Any]:
    path_only, _, query = path.partition("?")
    if params:
        query = f"{query}&{urlencode(params)}" if query else urlencode(params)
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "scheme": "http",
        "path": unquote(path_only),
        "raw_path": path_only.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in headers.items()],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class _ResponseCollector:
    """ASGI ``send`` target that reassembles a Response."""

    __slots__ = ("chunks", "headers", "status")

    def __init__(self) -> None:
        self.status = 500
        self.headers: list[tuple[str, str]] = []
        self.chunks: list[bytes] = []

    async def send(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = [
                (name.decode("latin-1"), value.decode("latin-1"))
                for name, value in message.get("headers", ())
            ]
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def response(self) -> Response:
        content_type = "text/plain; charset=utf-8"
        extra: list[tuple[str, str]] = []
        for name, value in self.headers:
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra.append((name, value))
        return Response(
            body=b"".join(self.chunks),
            status=self.status,
            content_type=content_type,
            headers=tuple(extra),
        )
