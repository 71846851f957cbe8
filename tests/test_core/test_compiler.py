"""Tests for compass.compiler: tokenizing, regex construction, optional suffixes."""

import pytest

from compass.compiler import RouteCompiler, TextToken, VariableToken
from compass.exceptions import LogicError
from compass.route import Route


class TestPathCompilation:
    def test_static_path(self) -> None:
        compiled = Route("/foo").compile()
        assert compiled.static_prefix == "/foo"
        assert compiled.regex.pattern == "^/foo$"
        assert compiled.tokens == (TextToken("/foo"),)
        assert compiled.path_variables == ()
        assert compiled.hostname_regex is None

    def test_single_variable(self) -> None:
        compiled = Route("/foo/{bar}").compile()
        assert compiled.static_prefix == "/foo"
        assert compiled.regex.pattern == "^/foo/([^/]+)$"
        assert compiled.path_variables == ("bar",)
        assert compiled.variables == ("bar",)

    def test_tokens_are_stored_tail_first(self) -> None:
        compiled = Route("/foo/{bar}").compile()
        assert compiled.tokens == (
            VariableToken(prefix="/", regex="[^/]+", name="bar"),
            TextToken("/foo"),
        )

    def test_variable_with_default_is_optional(self) -> None:
        compiled = Route("/foo/{bar}", defaults={"bar": "bar"}).compile()
        assert compiled.regex.pattern == "^/foo(?:/([^/]+))?$"
        assert compiled.regex.match("/foo")
        assert compiled.regex.match("/foo/baz")

    def test_lone_optional_variable(self) -> None:
        compiled = Route("/{page}", defaults={"page": "index"}).compile()
        assert compiled.static_prefix == ""
        assert compiled.regex.pattern == "^/([^/]+)?$"
        assert compiled.regex.match("/")
        assert not compiled.regex.match("")

    def test_several_optional_variables(self) -> None:
        compiled = Route(
            "/blog/{page}/{sort}",
            defaults={"page": "1", "sort": "asc"},
        ).compile()
        assert compiled.regex.pattern == "^/blog(?:/([^/]+)(?:/([^/]+))?)?$"
        assert compiled.regex.match("/blog").groups() == (None, None)
        assert compiled.regex.match("/blog/2").groups() == ("2", None)
        assert compiled.regex.match("/blog/2/desc").groups() == ("2", "desc")

    def test_optional_suffix_stops_at_mandatory_variable(self) -> None:
        compiled = Route("/{page}.{_format}", defaults={"_format": "html"}).compile()
        assert compiled.regex.match("/index").groups() == ("index", None)
        assert compiled.regex.match("/index.json").groups() == ("index", "json")
        assert not compiled.regex.match("/")

    def test_text_after_variable_disables_optional(self) -> None:
        compiled = Route("/{page}/edit", defaults={"page": "1"}).compile()
        assert compiled.regex.pattern == "^/([^/]+)/edit$"

    def test_next_separator_is_excluded(self) -> None:
        compiled = Route("/{year}-{month}").compile()
        assert compiled.tokens[1] == VariableToken(prefix="/", regex=r"[^/\-]+", name="year")
        assert not compiled.regex.match("/2024")
        match = compiled.regex.match("/2024-05")
        assert match is not None
        assert match.groups() == ("2024", "05")

    def test_adjacent_variables(self) -> None:
        compiled = Route("/{x}{y}").compile()
        assert compiled.tokens == (
            VariableToken(prefix="", regex="[^/]+", name="y"),
            VariableToken(prefix="/", regex="[^/]+", name="x"),
        )

    def test_text_ending_with_separator(self) -> None:
        compiled = Route("/archive-{year}").compile()
        assert compiled.tokens == (
            VariableToken(prefix="-", regex="[^/]+", name="year"),
            TextToken("/archive"),
        )
        assert compiled.static_prefix == "/archive"

    def test_requirement_replaces_default_regex(self) -> None:
        compiled = Route("/post/{id}", requirements={"id": r"\d+"}).compile()
        assert compiled.regex.pattern == r"^/post/(\d+)$"
        assert compiled.regex.match("/post/42")
        assert not compiled.regex.match("/post/abc")

    def test_literal_text_is_escaped(self) -> None:
        compiled = Route("/file.txt").compile()
        assert compiled.regex.match("/file.txt")
        assert not compiled.regex.match("/fileatxt")

    def test_duplicate_variable_fails(self) -> None:
        with pytest.raises(LogicError, match="more than once"):
            Route("/{foo}/{foo}").compile()

    def test_nested_braces_match_innermost(self) -> None:
        compiled = Route("/{foo{bar}}").compile()
        assert compiled.path_variables == ("bar",)


class TestHostnameCompilation:
    def test_hostname_variables(self) -> None:
        compiled = Route("/hello", hostname="{locale}.example.com").compile()
        assert compiled.hostname_variables == ("locale",)
        assert compiled.hostname_regex is not None
        assert compiled.hostname_regex.match("en.example.com").group(1) == "en"
        assert compiled.hostname_tokens == (
            TextToken(".example.com"),
            VariableToken(prefix="", regex=r"[^\.]+", name="locale"),
        )

    def test_hostname_variables_are_never_optional(self) -> None:
        compiled = Route(
            "/",
            hostname="www.{domain}",
            defaults={"domain": "example.com"},
        ).compile()
        assert compiled.hostname_regex is not None
        assert compiled.hostname_regex.pattern == r"^www\.([^\.]+)$"
        assert not compiled.hostname_regex.match("www.")

    def test_variables_hostname_first_without_duplicates(self) -> None:
        compiled = Route("/{locale}/{page}", hostname="{locale}.{domain}").compile()
        assert compiled.hostname_variables == ("locale", "domain")
        assert compiled.path_variables == ("locale", "page")
        assert compiled.variables == ("locale", "domain", "page")


class TestRouteCompiler:
    def test_compile_is_deterministic(self) -> None:
        route = Route("/blog/{page}", defaults={"page": "1"}, hostname="{sub}.example.com")
        first = RouteCompiler().compile(route)
        second = RouteCompiler().compile(route)
        assert first.regex.pattern == second.regex.pattern
        assert first.tokens == second.tokens
        assert first.variables == second.variables

    def test_find_next_separator(self) -> None:
        assert RouteCompiler.find_next_separator("") == ""
        assert RouteCompiler.find_next_separator(".{_format}") == "."
        assert RouteCompiler.find_next_separator("{other}-x") == "-"
        assert RouteCompiler.find_next_separator("abc") == ""
