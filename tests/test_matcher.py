"""Tests for fileroute.routing.matcher — first-match-wins matching."""

from fileroute.routing.matcher import match_route, strip_prefix
from fileroute.routing.route import RouteDescriptor


def _route(
    template: str,
    methods: set[str] | None = None,
    handler_ref: str | None = None,
) -> RouteDescriptor:
    return RouteDescriptor(
        template=template,
        methods=frozenset(methods) if methods is not None else None,
        auth_rule=None,
        handler_ref=handler_ref or f"{template}.py",
    )


class TestStripPrefix:
    def test_strips(self) -> None:
        assert strip_prefix("/api/users", "/api/") == "users"

    def test_discards_text_before_prefix(self) -> None:
        assert strip_prefix("/app/api/users", "/api/") == "users"

    def test_missing_prefix(self) -> None:
        assert strip_prefix("/users", "/api/") is None


class TestMatchRoute:
    def test_param_extraction(self) -> None:
        match = match_route([_route("/user/:id", {"GET"})], "GET", "/api/user/42")
        assert match is not None
        assert match.path_params == {"id": "42"}

    def test_param_extraction_any_method(self) -> None:
        match = match_route([_route("/user/:id")], "DELETE", "/api/user/42")
        assert match is not None
        assert match.path_params == {"id": "42"}

    def test_method_filtering(self) -> None:
        assert match_route([_route("/user/:id", {"GET"})], "POST", "/api/user/42") is None

    def test_multi_method_membership(self) -> None:
        route = _route("/user/:id", {"GET", "POST"})
        assert match_route([route], "POST", "/api/user/42") is not None
        assert match_route([route], "PATCH", "/api/user/42") is None

    def test_segment_count_mismatch(self) -> None:
        routes = [_route("/user/:id")]
        assert match_route(routes, "GET", "/api/user/42/edit") is None
        assert match_route(routes, "GET", "/api/user") is None

    def test_literal_is_case_sensitive(self) -> None:
        assert match_route([_route("/Users")], "GET", "/api/users") is None

    def test_multiple_params(self) -> None:
        match = match_route([_route("/org/:org/repo/:repo")], "GET", "/api/org/acme/repo/web")
        assert match is not None
        assert match.path_params == {"org": "acme", "repo": "web"}

    def test_first_match_wins_over_specificity(self) -> None:
        generic = _route("/user/:id", handler_ref="generic.py")
        specific = _route("/user/me", handler_ref="specific.py")

        match = match_route([generic, specific], "GET", "/api/user/me")
        assert match is not None
        assert match.route.handler_ref == "generic.py"
        assert match.path_params == {"id": "me"}

        match = match_route([specific, generic], "GET", "/api/user/me")
        assert match is not None
        assert match.route.handler_ref == "specific.py"
        assert match.path_params == {}

    def test_method_skip_falls_through_to_later_route(self) -> None:
        get_only = _route("/items", {"GET"}, handler_ref="list.py")
        post_only = _route("/items", {"POST"}, handler_ref="create.py")
        match = match_route([get_only, post_only], "POST", "/api/items")
        assert match is not None
        assert match.route.handler_ref == "create.py"

    def test_trailing_slash_trimmed(self) -> None:
        assert match_route([_route("/users")], "GET", "/api/users/") is not None

    def test_double_slash_is_literal_empty_segment(self) -> None:
        routes = [_route("/a/b")]
        assert match_route(routes, "GET", "/api/a//b") is None
        assert match_route([_route("a//b")], "GET", "/api/a//b") is not None

    def test_root(self) -> None:
        match = match_route([_route("/")], "GET", "/api/")
        assert match is not None
        assert match.path_params == {}

    def test_missing_prefix_never_matches(self) -> None:
        assert match_route([_route("/users")], "GET", "/users") is None

    def test_custom_prefix(self) -> None:
        assert match_route([_route("/users")], "GET", "/v1/users", prefix="/v1/") is not None

    def test_no_routes(self) -> None:
        assert match_route([], "GET", "/api/users") is None

    def test_params_are_fresh_per_match(self) -> None:
        routes = [_route("/user/:id")]
        first = match_route(routes, "GET", "/api/user/1")
        second = match_route(routes, "GET", "/api/user/2")
        assert first is not None and second is not None
        assert first.path_params == {"id": "1"}
        assert second.path_params == {"id": "2"}

    def test_encoded_slash_stays_in_segment(self) -> None:
        match = match_route([_route("/files/:name")], "GET", "/api/files/a%2Fb")
        assert match is not None
        assert match.path_params == {"name": "a/b"}

    def test_segments_decoded_after_split(self) -> None:
        match = match_route([_route("/files/:name")], "GET", "/api/files/caf%C3%A9%20menu")
        assert match is not None
        assert match.path_params == {"name": "café menu"}

    def test_encoded_literal_matches(self) -> None:
        assert match_route([_route("/user/me")], "GET", "/api/user/m%65") is not None
