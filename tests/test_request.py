"""Tests for fileroute.http.request."""

from typing import Any

from fileroute.http.request import Request


def _receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    return receive


def _scope(**overrides: Any) -> dict[str, Any]:
    scope: dict[str, Any] = {
        "type": "http",
        "method": "POST",
        "path": "/api/items",
        "query_string": b"page=2",
        "headers": [(b"content-type", b"application/json")],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


class TestFromASGI:
    def test_metadata(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b""))
        assert request.method == "POST"
        assert request.path == "/api/items"
        assert request.query["page"] == "2"
        assert request.content_type == "application/json"
        assert request.url == "/api/items?page=2"
        assert request.server == ("testserver", 80)
        assert request.path_params == {}

    def test_url_without_query(self) -> None:
        request = Request.from_asgi(_scope(query_string=b""), _receiver(b""))
        assert request.url == "/api/items"


class TestBody:
    async def test_chunked_body_is_joined_and_cached(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b'{"a"', b": 1}"))
        assert await request.json() == {"a": 1}
        # receive is exhausted; the cached body is served
        assert await request.text() == '{"a": 1}'

    async def test_path_params_copy_shares_body(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b"hello"))
        bound = request.with_path_params({"id": "7"})
        assert bound.path_params == {"id": "7"}
        assert request.path_params == {}
        assert await bound.body() == b"hello"
        assert await request.body() == b"hello"


class TestEncodedPath:
    def test_raw_path_preferred(self) -> None:
        scope = _scope(path="/api/files/a/b", raw_path=b"/api/files/a%2Fb")
        request = Request.from_asgi(scope, _receiver(b""))
        assert request.path == "/api/files/a/b"
        assert request.encoded_path == "/api/files/a%2Fb"

    def test_query_stripped_from_raw_path(self) -> None:
        request = Request.from_asgi(_scope(raw_path=b"/api/items?page=2"), _receiver(b""))
        assert request.encoded_path == "/api/items"

    def test_falls_back_to_quoted_path(self) -> None:
        request = Request.from_asgi(_scope(path="/api/café"), _receiver(b""))
        assert request.encoded_path == "/api/caf%C3%A9"
