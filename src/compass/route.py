"""
Route definitions.

A Route holds the path and hostname templates plus the defaults,
requirements, schemes and methods attached to them. It compiles itself
on demand and caches the result until the next mutation.
"""

import threading
from collections.abc import Iterable
from typing import Any

from compass.compiler import CompiledRoute, RouteCompiler
from compass.exceptions import InvalidArgumentError
from compass.types import Defaults, Requirements


def _as_list(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class Route:
    """
    A single route definition.

    Every setter marks the compiled form dirty; ``compile()`` rebuilds it
    on the next read. Compilation runs outside the lock and its result is
    only stored if no mutation happened in the meantime.

    Usage:
        route = Route("/blog/{page}", defaults={"page": "1"},
                      requirements={"page": r"\\d+"})
        compiled = route.compile()
    """

    compiler_class: type[RouteCompiler] = RouteCompiler

    def __init__(
        self,
        path: str,
        defaults: Defaults | None = None,
        requirements: Requirements | None = None,
        hostname: str = "",
        schemes: str | Iterable[str] | None = None,
        methods: str | Iterable[str] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._version = 0
        self._compiled: CompiledRoute | None = None

        self._path = "/"
        self._hostname = ""
        self._schemes: list[str] = []
        self._methods: list[str] = []
        self._defaults: dict[str, Any] = {}
        self._requirements: dict[str, str] = {}

        self.path = path
        self.hostname = hostname
        self.schemes = schemes
        self.methods = methods
        self.add_defaults(defaults)
        self.add_requirements(requirements)

    def __repr__(self) -> str:
        return f"Route(path={self._path!r}, hostname={self._hostname!r})"

    def _invalidate(self) -> None:
        with self._lock:
            self._version += 1
            self._compiled = None

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """The path template, always starting with a single ``/``."""
        return self._path

    @path.setter
    def path(self, pattern: str) -> None:
        self._path = "/" + pattern.strip().lstrip("/")
        self._invalidate()

    @property
    def hostname(self) -> str:
        """The hostname template; empty means any host."""
        return self._hostname

    @hostname.setter
    def hostname(self, pattern: str | None) -> None:
        self._hostname = pattern or ""
        self._invalidate()

    # ------------------------------------------------------------------
    # Restrictions
    # ------------------------------------------------------------------

    @property
    def schemes(self) -> list[str]:
        """Lower-cased schemes this route is restricted to (empty = any)."""
        return list(self._schemes)

    @schemes.setter
    def schemes(self, schemes: str | Iterable[str] | None) -> None:
        self._schemes = list(dict.fromkeys(s.lower() for s in _as_list(schemes)))
        self._invalidate()

    @property
    def methods(self) -> list[str]:
        """Upper-cased HTTP methods this route is restricted to (empty = any)."""
        return list(self._methods)

    @methods.setter
    def methods(self, methods: str | Iterable[str] | None) -> None:
        self._methods = list(dict.fromkeys(m.upper() for m in _as_list(methods)))
        self._invalidate()

    # ------------------------------------------------------------------
    # Defaults
    # ------------------------------------------------------------------

    @property
    def defaults(self) -> dict[str, Any]:
        return dict(self._defaults)

    @defaults.setter
    def defaults(self, defaults: Defaults | None) -> None:
        self._defaults = {}
        self.add_defaults(defaults)

    def add_defaults(self, defaults: Defaults | None) -> "Route":
        """Merge defaults into the route, overriding existing keys."""
        if defaults:
            self._defaults.update(defaults)
        self._invalidate()
        return self

    def get_default(self, name: str) -> Any:
        return self._defaults.get(name)

    def has_default(self, name: str) -> bool:
        return name in self._defaults

    def set_default(self, name: str, value: Any) -> "Route":
        self._defaults[name] = value
        self._invalidate()
        return self

    # ------------------------------------------------------------------
    # Requirements
    # ------------------------------------------------------------------

    @property
    def requirements(self) -> dict[str, str]:
        return dict(self._requirements)

    @requirements.setter
    def requirements(self, requirements: Requirements | None) -> None:
        self._requirements = {}
        self.add_requirements(requirements)

    def add_requirements(self, requirements: Requirements | None) -> "Route":
        """
        Merge requirements into the route, overriding existing keys.

        Raises ``InvalidArgumentError`` for a non-string or empty requirement.
        """
        if requirements:
            for name, regex in requirements.items():
                self._requirements[name] = self._sanitize_requirement(name, regex)
        self._invalidate()
        return self

    def get_requirement(self, name: str) -> str | None:
        return self._requirements.get(name)

    def has_requirement(self, name: str) -> bool:
        return name in self._requirements

    def set_requirement(self, name: str, regex: str) -> "Route":
        self._requirements[name] = self._sanitize_requirement(name, regex)
        self._invalidate()
        return self

    @staticmethod
    def _sanitize_requirement(name: str, regex: Any) -> str:
        if not isinstance(regex, str):
            raise InvalidArgumentError(
                f'Routing requirement for "{name}" must be a string.'
            )
        if regex.startswith("^"):
            regex = regex[1:]
        if regex.endswith("$"):
            regex = regex[:-1]
        if not regex:
            raise InvalidArgumentError(
                f'Routing requirement for "{name}" cannot be empty.'
            )
        return regex

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self) -> CompiledRoute:
        """
        Return the compiled form, compiling it if the route changed.

        Raises ``LogicError`` if a template cannot be compiled.
        """
        with self._lock:
            compiled = self._compiled
            version = self._version
        if compiled is not None:
            return compiled

        compiled = self.compiler_class().compile(self)

        with self._lock:
            if self._version == version:
                self._compiled = compiled
        return compiled
