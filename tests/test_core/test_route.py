"""Tests for compass.route: normalization, requirements, compiled cache."""

import pytest

from compass.compiler import CompiledRoute, RouteCompiler
from compass.exceptions import InvalidArgumentError
from compass.route import Route


class TestRouteDefinition:
    @pytest.mark.parametrize(
        ("given", "expected"),
        [("foo", "/foo"), ("/foo", "/foo"), ("  /foo ", "/foo"), ("//foo", "/foo"), ("", "/")],
    )
    def test_path_is_normalized(self, given: str, expected: str) -> None:
        assert Route(given).path == expected

    def test_hostname_defaults_to_empty(self) -> None:
        assert Route("/").hostname == ""
        assert Route("/", hostname=None).hostname == ""  # type: ignore[arg-type]

    def test_schemes_are_lowercased(self) -> None:
        assert Route("/", schemes="HTTPS").schemes == ["https"]
        assert Route("/", schemes=["Http", "HTTPS"]).schemes == ["http", "https"]

    def test_methods_are_uppercased(self) -> None:
        assert Route("/", methods="post").methods == ["POST"]
        assert Route("/", methods=["get", "head"]).methods == ["GET", "HEAD"]

    def test_empty_restrictions_mean_any(self) -> None:
        route = Route("/")
        assert route.schemes == []
        assert route.methods == []

    def test_defaults(self) -> None:
        route = Route("/", defaults={"page": "1"})
        assert route.has_default("page")
        assert route.get_default("page") == "1"
        assert not route.has_default("other")
        assert route.get_default("other") is None

        route.set_default("page", "2").add_defaults({"sort": "asc"})
        assert route.defaults == {"page": "2", "sort": "asc"}

    def test_defaults_returns_copy(self) -> None:
        route = Route("/", defaults={"page": "1"})
        route.defaults["page"] = "changed"
        assert route.get_default("page") == "1"

    def test_defaults_setter_replaces(self) -> None:
        route = Route("/", defaults={"page": "1"})
        route.defaults = {"sort": "asc"}
        assert route.defaults == {"sort": "asc"}


class TestRequirements:
    def test_anchors_are_stripped(self) -> None:
        route = Route("/", requirements={"id": r"^\d+$"})
        assert route.get_requirement("id") == r"\d+"

    def test_set_requirement(self) -> None:
        route = Route("/")
        route.set_requirement("id", "^[a-z]+")
        assert route.has_requirement("id")
        assert route.get_requirement("id") == "[a-z]+"
        assert route.get_requirement("missing") is None

    @pytest.mark.parametrize("regex", ["", "^", "$", "^$"])
    def test_empty_requirement_fails(self, regex: str) -> None:
        with pytest.raises(InvalidArgumentError, match="cannot be empty"):
            Route("/", requirements={"id": regex})

    def test_non_string_requirement_fails(self) -> None:
        route = Route("/")
        with pytest.raises(InvalidArgumentError, match="must be a string"):
            route.set_requirement("id", 42)  # type: ignore[arg-type]

    def test_failed_requirement_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            Route("/").set_requirement("id", "")


class TestCompiledCache:
    def test_compile_is_cached(self) -> None:
        route = Route("/foo/{bar}")
        assert route.compile() is route.compile()

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda r: setattr(r, "path", "/other/{bar}"),
            lambda r: setattr(r, "hostname", "{sub}.example.com"),
            lambda r: setattr(r, "schemes", ["https"]),
            lambda r: setattr(r, "methods", ["POST"]),
            lambda r: r.set_default("bar", "x"),
            lambda r: r.add_defaults({"bar": "x"}),
            lambda r: r.set_requirement("bar", r"\d+"),
            lambda r: r.add_requirements({"bar": r"\d+"}),
        ],
    )
    def test_mutation_invalidates_cache(self, mutate) -> None:
        route = Route("/foo/{bar}")
        before = route.compile()
        mutate(route)
        assert route.compile() is not before

    def test_recompiled_form_reflects_changes(self) -> None:
        route = Route("/foo/{bar}")
        assert route.compile().regex.match("/foo/abc")
        route.set_requirement("bar", r"\d+")
        assert not route.compile().regex.match("/foo/abc")
        assert route.compile().regex.match("/foo/123")

    def test_mutation_during_compile_is_not_cached(self) -> None:
        class MutatingCompiler(RouteCompiler):
            def compile(self, route: Route) -> CompiledRoute:
                compiled = super().compile(route)
                if not route.has_requirement("bar"):
                    route.set_requirement("bar", r"\d+")
                return compiled

        route = Route("/foo/{bar}")
        route.compiler_class = MutatingCompiler

        stale = route.compile()
        assert stale.regex.pattern == "^/foo/([^/]+)$"

        fresh = route.compile()
        assert fresh is not stale
        assert fresh.regex.pattern == r"^/foo/(\d+)$"
        assert route.compile() is fresh
