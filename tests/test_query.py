"""Tests for fileroute.http.query."""

from fileroute.http.query import QueryParams


class TestQueryParams:
    def test_first_value(self) -> None:
        query = QueryParams(b"tag=a&tag=b&page=2")
        assert query["tag"] == "a"
        assert query.get("page") == "2"
        assert query.get("missing") is None

    def test_get_list(self) -> None:
        query = QueryParams(b"tag=a&tag=b")
        assert query.get_list("tag") == ["a", "b"]
        assert query.get_list("missing") == []

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=")["flag"] == ""

    def test_percent_decoding(self) -> None:
        assert QueryParams(b"q=hello%20world")["q"] == "hello world"

    def test_empty(self) -> None:
        assert len(QueryParams()) == 0

    def test_raw(self) -> None:
        assert QueryParams(b"a=1&b=2").raw == b"a=1&b=2"
