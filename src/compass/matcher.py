"""
URL matching.
"""

import re
from typing import Any

from compass.collection import RouteCollection
from compass.compiler import CompiledRoute
from compass.context import RequestContext
from compass.route import Route
from compass.types import Parameters


class UrlMatcher:
    """
    Matches a URI against a RouteCollection.

    Routes are tried in collection order and the first one that matches
    wins. There is no specificity ranking.
    """

    def __init__(self, routes: RouteCollection, context: RequestContext) -> None:
        self._routes = routes
        self.context = context

    def match(self, uri: str) -> Parameters | None:
        """
        Return the parameters of the first matching route, or ``None``.

        The result always contains ``_route`` (the route name), the route's
        defaults, and the captured path and hostname variables.
        """
        return self.match_collection(uri, self._routes)

    def match_collection(
        self,
        uri: str,
        routes: RouteCollection,
    ) -> Parameters | None:
        for name, route in routes.all().items():
            compiled = route.compile()

            # Cheap rejection before running the regex
            if compiled.static_prefix and not uri.startswith(compiled.static_prefix):
                continue

            # fullmatch: "$" alone would accept a trailing newline
            matches = compiled.regex.fullmatch(uri)
            if matches is None:
                continue

            hostname_matches: re.Match[str] | None = None
            if compiled.hostname_regex is not None:
                hostname_matches = compiled.hostname_regex.fullmatch(self.context.host)
                if hostname_matches is None:
                    continue

            if not self._method_allowed(route):
                continue

            if not self.handle_route_requirements(uri, name, route):
                continue

            return self.get_attributes(route, name, compiled, matches, hostname_matches)

        return None

    def _method_allowed(self, route: Route) -> bool:
        # HEAD is answered like GET
        allowed = {self.context.method}
        if self.context.method == "HEAD":
            allowed.add("GET")

        requirement = route.get_requirement("_method")
        if requirement is not None and not allowed.intersection(requirement.upper().split("|")):
            return False

        methods = route.methods
        return not methods or bool(allowed.intersection(methods))

    def handle_route_requirements(self, uri: str, name: str, route: Route) -> bool:
        """Check the scheme restrictions of a route against the context."""
        scheme = route.get_requirement("_scheme")
        if scheme is not None and scheme != self.context.scheme:
            return False

        schemes = route.schemes
        return not schemes or self.context.scheme in schemes

    @staticmethod
    def get_attributes(
        route: Route,
        name: str,
        compiled: CompiledRoute,
        matches: re.Match[str],
        hostname_matches: re.Match[str] | None,
    ) -> Parameters:
        params: dict[str, Any] = {"_route": name}
        params.update(route.defaults)

        for index, variable in enumerate(compiled.path_variables, start=1):
            value = matches.group(index)
            if value is not None:
                params[variable] = value

        if hostname_matches is not None:
            for index, variable in enumerate(compiled.hostname_variables, start=1):
                value = hostname_matches.group(index)
                if value is not None:
                    params[variable] = value

        return params
