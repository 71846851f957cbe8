"""
Ordered, name-keyed set of routes.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from compass.route import Route
from compass.types import Defaults, Requirements

RouteVisitor = Callable[[str, Route], Any]


class RouteCollection:
    """
    A set of Route instances keyed by name.

    Insertion order is match priority. Adding a route under a name that
    is already registered removes the old entry first, so the new route
    moves to the end of the collection.
    """

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._routes))

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __repr__(self) -> str:
        return f"RouteCollection({list(self._routes)!r})"

    def add(self, name: str, route: Route) -> None:
        """Add a route, replacing any route with the same name."""
        self._routes.pop(name, None)
        self._routes[name] = route

    def all(self) -> dict[str, Route]:
        """All routes, in priority order."""
        return dict(self._routes)

    def get(self, name: str) -> Route | None:
        return self._routes.get(name)

    def remove(self, name: str | Iterable[str]) -> None:
        """Remove a route or several routes by name."""
        names = [name] if isinstance(name, str) else list(name)
        for item in names:
            self._routes.pop(item, None)

    def for_each(self, visitor: RouteVisitor) -> None:
        """
        Call ``visitor(name, route)`` for each route in order.

        Iteration stops as soon as the visitor returns ``False``.
        """
        for name, route in list(self._routes.items()):
            if visitor(name, route) is False:
                return

    # ------------------------------------------------------------------
    # Bulk helpers
    # ------------------------------------------------------------------

    def add_collection(self, collection: "RouteCollection") -> None:
        """Append all routes of another collection; its names win."""
        for name, route in collection.all().items():
            self.add(name, route)

    def add_prefix(self, prefix: str) -> None:
        """Prepend a path prefix to every route."""
        prefix = prefix.strip().strip("/")
        if not prefix:
            return
        for route in self._routes.values():
            route.path = f"/{prefix}{route.path}"

    def set_hostname(
        self,
        pattern: str,
        defaults: Defaults | None = None,
        requirements: Requirements | None = None,
    ) -> None:
        """Set the hostname template on every route."""
        for route in self._routes.values():
            route.hostname = pattern
            route.add_defaults(defaults)
            route.add_requirements(requirements)

    def add_defaults(self, defaults: Defaults) -> None:
        for route in self._routes.values():
            route.add_defaults(defaults)

    def add_requirements(self, requirements: Requirements) -> None:
        for route in self._routes.values():
            route.add_requirements(requirements)

    def set_schemes(self, schemes: str | Iterable[str]) -> None:
        for route in self._routes.values():
            route.schemes = schemes

    def set_methods(self, methods: str | Iterable[str]) -> None:
        for route in self._routes.values():
            route.methods = methods

    def compile_all(self) -> None:
        """
        Compile every route now.

        Call this before sharing the collection with matchers or
        generators used from several threads.
        """
        for route in self._routes.values():
            route.compile()
