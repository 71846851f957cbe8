"""
Shared fixtures and helpers for the compass test suite.
"""

from typing import Any

import pytest

from compass import RequestContext, Route, RouteCollection


def make_scope(
    method: str = "GET",
    path: str = "/",
    headers: dict[str, str] | None = None,
    scheme: str = "http",
    server: tuple[str, int] | None = ("testserver", 80),
    extras: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a minimal ASGI HTTP scope dict."""
    raw_headers: list[tuple[bytes, bytes]] = []
    for name, value in (headers or {}).items():
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    scope: dict[str, Any] = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": b"",
        "headers": raw_headers,
        "client": ("127.0.0.1", 12345),
        "scheme": scheme,
        "server": server,
    }
    if extras:
        scope.update(extras)
    return scope


def write_file(directory: Any, name: str, content: str) -> str:
    """Write a definition file and return its absolute path."""
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return str(path)


@pytest.fixture
def context() -> RequestContext:
    return RequestContext()


@pytest.fixture
def routes() -> RouteCollection:
    """A small site: a static page route, a blog and a dated archive."""
    collection = RouteCollection()
    collection.add("about", Route("/about"))
    collection.add("blog_post", Route("/blog/{slug}"))
    collection.add(
        "archive",
        Route("/archive/{year}-{month}", requirements={"year": r"\d{4}", "month": r"\d{2}"}),
    )
    collection.add("static_page", Route("/{page}", defaults={"page": "index"}))
    return collection
