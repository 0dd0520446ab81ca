"""Tests for methodguard.routing.router — exact-path router."""

import pytest

from methodguard.errors import ConfigurationError, NotFound
from methodguard.routing.route import Route, RouteDescriptor
from methodguard.routing.router import Router


def _handler() -> str:
    return "ok"


def _route(path: str, methods: tuple[str, ...] = ("GET",)) -> Route:
    return Route(path=path, handler=_handler, methods=methods)


class TestRouterMatch:
    def test_simple_path(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        assert r.match("GET", "/users").route.path == "/users"

    def test_multiple_methods(self) -> None:
        r = Router()
        r.add(_route("/users", ("GET", "POST")))
        r.compile()

        assert r.match("POST", "/users").route.methods == ("GET", "POST")

    def test_unknown_path(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        with pytest.raises(NotFound):
            r.match("GET", "/posts")

    def test_unknown_method_is_not_found(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        with pytest.raises(NotFound, match="DELETE '/users'"):
            r.match("DELETE", "/users")

    def test_exact_match_only(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        with pytest.raises(NotFound):
            r.match("GET", "/users/")

    def test_head_falls_back_to_get(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        assert r.match("HEAD", "/users").route.methods == ("GET",)

    def test_explicit_head_preferred(self) -> None:
        head_route = Route(path="/users", handler=lambda: "head", methods=("HEAD",))
        r = Router()
        r.add(_route("/users"))
        r.add(head_route)
        r.compile()

        assert r.match("HEAD", "/users").route is head_route


class TestRouterRegistration:
    def test_add_after_compile(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(RuntimeError, match="after compilation"):
            r.add(_route("/users"))

    def test_duplicate_method(self) -> None:
        r = Router()
        r.add(_route("/users", ("GET", "POST")))
        with pytest.raises(ConfigurationError, match="Duplicate route POST '/users'"):
            r.add(_route("/users", ("POST",)))

    def test_path_must_start_with_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with '/'"):
            Router().add(_route("users"))

    def test_same_path_other_method(self) -> None:
        r = Router()
        r.add(_route("/users", ("GET",)))
        r.add(_route("/users", ("POST",)))
        r.compile()
        assert r.match("POST", "/users").route.methods == ("POST",)


class TestRouterIntrospection:
    def test_routes_in_registration_order(self) -> None:
        r = Router()
        r.add(_route("/b"))
        r.add(_route("/a"))
        assert [route.path for route in r.routes] == ["/b", "/a"]

    def test_table_one_row_per_method(self) -> None:
        r = Router()
        r.add(_route("/users", ("GET", "POST")))
        r.add(_route("/posts", ("DELETE",)))
        assert r.table() == [
            RouteDescriptor("/users", "get"),
            RouteDescriptor("/users", "post"),
            RouteDescriptor("/posts", "delete"),
        ]
