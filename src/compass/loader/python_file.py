"""
Python route definition files.

The file is executed and must define a module-level ``routes`` mapping
with the same structure as a YAML definition file::

    routes = {
        "homepage": {"path": "/", "defaults": {"page": "index"}},
    }
"""

import runpy
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from compass.collection import RouteCollection
from compass.exceptions import InvalidDefinitionError
from compass.loader.locator import FileLocator
from compass.loader.parser import RouteDefinitionParser

if TYPE_CHECKING:
    from compass.loader.base import LoaderResolver

ROUTES_ATTRIBUTE: str = "routes"


class PyFileLoader:
    """Loads routes from ``.py`` files exposing a ``routes`` mapping."""

    def __init__(
        self,
        locator: FileLocator,
        resolver: "LoaderResolver | None" = None,
    ) -> None:
        self.locator = locator
        self._parser = RouteDefinitionParser(self, locator, resolver)

    @property
    def resolver(self) -> "LoaderResolver | None":
        return self._parser.resolver

    @resolver.setter
    def resolver(self, resolver: "LoaderResolver | None") -> None:
        self._parser.resolver = resolver

    def supports(self, resource: Any, type: str | None = None) -> bool:
        if not isinstance(resource, (str, Path)):
            return False
        if type not in (None, "python"):
            return False
        return Path(resource).suffix == ".py"

    def load(self, resource: Any, type: str | None = None) -> RouteCollection:
        return self._parser.load_file(resource, self._read)

    @staticmethod
    def _read(path: Path) -> Mapping[str, Any]:
        namespace = runpy.run_path(str(path))
        if ROUTES_ATTRIBUTE not in namespace:
            raise InvalidDefinitionError(
                f'The file "{path}" must define a "{ROUTES_ATTRIBUTE}" mapping.'
            )
        return namespace[ROUTES_ATTRIBUTE]
