"""
Compass exceptions.

Definition, lookup and parameter errors derive from ``InvalidArgumentError``
so callers can catch every caller-side mistake in one place. A failed match
is not an error: ``UrlMatcher.match()`` returns ``None``.
"""

from typing import Any


class CompassException(Exception):
    """Base exception for all compass errors."""

    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class RoutingError(CompassException):
    """Routing-related errors."""
    pass


class InvalidArgumentError(RoutingError, ValueError):
    """A route was given an argument it cannot accept (e.g. an empty requirement)."""
    pass


class LogicError(RoutingError):
    """A route template is internally inconsistent and cannot be compiled."""
    pass


class RouteNotFoundError(InvalidArgumentError):
    """Raised when generating a URL for a route name that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Route "{name}" does not exist.')


class MissingMandatoryParametersError(InvalidArgumentError):
    """Raised when generation lacks values for one or more route variables."""

    def __init__(self, route_name: str, missing: list[str]) -> None:
        self.route_name = route_name
        self.missing = list(missing)
        names = '", "'.join(self.missing)
        super().__init__(
            f'The "{route_name}" route has some missing mandatory parameters ("{names}").'
        )


class InvalidParameterError(InvalidArgumentError):
    """Raised when a parameter value does not satisfy its requirement."""

    def __init__(
        self,
        route_name: str,
        parameter: str,
        pattern: str,
        value: Any,
    ) -> None:
        self.route_name = route_name
        self.parameter = parameter
        self.pattern = pattern
        self.value = value
        super().__init__(
            f'Parameter "{parameter}" for route "{route_name}" must match '
            f'"{pattern}" ("{value}" given).'
        )


class LoaderError(CompassException):
    """Errors raised while turning resources into route collections."""
    pass


class InvalidDefinitionError(LoaderError, ValueError):
    """A route entry in a definition file is malformed."""
    pass


class LoaderLoadError(LoaderError):
    """No registered loader supports the given resource."""

    def __init__(self, resource: Any, type: str | None = None) -> None:
        self.resource = resource
        self.type = type
        detail = f' of type "{type}"' if type else ""
        super().__init__(f'Cannot find a loader for resource "{resource}"{detail}.')


class FileLocatorFileNotFoundError(LoaderError):
    """A named resource could not be found in any search path."""

    def __init__(self, name: str, paths: list[str]) -> None:
        self.name = name
        self.paths = list(paths)
        searched = ", ".join(self.paths) or "-"
        super().__init__(f'The file "{name}" does not exist (in: {searched}).')


class CircularImportError(LoaderError):
    """A resource imports itself, directly or through other resources."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            "Circular reference detected in route resources: "
            + " > ".join(self.chain)
        )
