"""Tests for fileroute.errors and the handler error mapping."""

from typing import Any

import pytest

from fileroute.errors import (
    CacheError,
    ConfigurationError,
    FileRouteError,
    HTTPError,
    NotFound,
    RouteDeclarationError,
    ScanError,
    Unauthorized,
)
from fileroute.http.headers import Headers
from fileroute.http.query import QueryParams
from fileroute.http.request import Request
from fileroute.server.errors import handle_http_error, handle_internal_error


def _request() -> Request:
    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b""}

    return Request(
        method="GET",
        path="/api/x",
        headers=Headers(),
        query=QueryParams(),
        path_params={},
        http_version="1.1",
        server=None,
        client=None,
        _receive=receive,
    )


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [ConfigurationError, ScanError, CacheError, HTTPError, NotFound, Unauthorized],
    )
    def test_subclasses_base(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, FileRouteError)

    def test_route_declaration_message(self) -> None:
        exc = RouteDeclarationError("routes/users.py", "empty method list")
        assert str(exc) == "Invalid route definition in routes/users.py: empty method list"
        assert exc.path == "routes/users.py"
        assert exc.detail == "empty method list"

    def test_not_found_defaults(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Route not found"
        assert str(exc) == "404: Route not found"

    def test_unauthorized_defaults(self) -> None:
        exc = Unauthorized()
        assert exc.status == 401
        assert exc.detail == "Unauthorized"

    def test_http_error_without_detail(self) -> None:
        assert str(HTTPError(status=503)) == "503"


class TestHandleHTTPError:
    def test_json_body_and_headers(self) -> None:
        exc = HTTPError(status=429, detail="Slow down", headers=(("Retry-After", "30"),))
        response = handle_http_error(exc, _request())
        assert response.status == 429
        assert response.json_body() == {"error": "Slow down"}
        assert ("Retry-After", "30") in response.headers

    def test_missing_detail_gets_generic_message(self) -> None:
        response = handle_http_error(HTTPError(status=409), _request())
        assert response.json_body() == {"error": "Error 409"}


class TestHandleInternalError:
    def test_hides_detail(self, caplog: pytest.LogCaptureFixture) -> None:
        try:
            raise RuntimeError("secret")
        except RuntimeError as exc:
            response = handle_internal_error(exc, _request(), debug=False)
        assert response.status == 500
        assert response.json_body() == {"error": "Internal Server Error"}
        assert any(r.name == "fileroute.server" for r in caplog.records)

    def test_debug_detail(self) -> None:
        response = handle_internal_error(RuntimeError("secret"), _request(), debug=True)
        assert response.json_body()["detail"] == "RuntimeError('secret')"
