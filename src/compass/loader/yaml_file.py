"""
YAML route definition files.

Example ``routing.yml``::

    homepage:
        path: /
        defaults: { page: index }

    blog:
        resource: blog.yml
        prefix: /blog
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from compass.collection import RouteCollection
from compass.exceptions import InvalidDefinitionError
from compass.loader.locator import FileLocator
from compass.loader.parser import RouteDefinitionParser

if TYPE_CHECKING:
    from compass.loader.base import LoaderResolver


class YamlFileLoader:
    """Loads routes from ``.yml`` / ``.yaml`` files."""

    extensions: tuple[str, ...] = (".yml", ".yaml")

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
        if type not in (None, "yaml"):
            return False
        return Path(resource).suffix in self.extensions

    def load(self, resource: Any, type: str | None = None) -> RouteCollection:
        return self._parser.load_file(resource, self._read)

    @staticmethod
    def _read(path: Path) -> Any:
        with path.open(encoding="utf-8") as f:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise InvalidDefinitionError(
                    f'The file "{path}" does not contain valid YAML: {exc}'
                ) from exc
