"""
Route definition parsing shared by the file loaders.

A definition file maps route names to entries. An entry either defines a
route (``path`` plus optional ``defaults``, ``requirements``, ``hostname``,
``schemes``, ``methods``) or imports another resource (``resource`` plus
optional ``type``, ``prefix`` and the same modifiers, which are applied to
every imported route).
"""

import logging
from collections.abc import Callable, Mapping
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any

from compass.collection import RouteCollection
from compass.exceptions import CircularImportError, InvalidDefinitionError, LoaderLoadError
from compass.loader.locator import FileLocator
from compass.route import Route

if TYPE_CHECKING:
    from compass.loader.base import Loader, LoaderResolver

logger = logging.getLogger("compass.loader")

AVAILABLE_KEYS: tuple[str, ...] = (
    "resource",
    "type",
    "prefix",
    "path",
    "hostname",
    "schemes",
    "methods",
    "defaults",
    "requirements",
)

# Files currently being loaded, innermost last
_loading: ContextVar[tuple[Path, ...]] = ContextVar("compass_loading", default=())


class RouteDefinitionParser:
    """
    Turns the mapping read from a definition file into a RouteCollection.

    ``loader`` is the file loader that owns this parser; it handles
    imports when no ``resolver`` is set.
    """

    def __init__(
        self,
        loader: "Loader",
        locator: FileLocator,
        resolver: "LoaderResolver | None" = None,
    ) -> None:
        self.loader = loader
        self.locator = locator
        self.resolver = resolver

    def load_file(self, resource: Any, read: Callable[[Path], Any]) -> RouteCollection:
        """Locate ``resource``, read it with ``read`` and parse the result."""
        chain = _loading.get()
        current_dir = chain[-1].parent if chain else None
        path = self.locator.locate(resource, current_dir)

        if path in chain:
            raise CircularImportError([str(p) for p in chain] + [str(path)])

        token = _loading.set(chain + (path,))
        try:
            configs = read(path)
            collection = self.parse(configs, path)
        finally:
            _loading.reset(token)

        logger.debug("Loaded %d routes from %s", len(collection), path)
        return collection

    def parse(self, configs: Any, path: Path) -> RouteCollection:
        collection = RouteCollection()
        if configs is None:
            return collection
        if not isinstance(configs, Mapping):
            raise InvalidDefinitionError(
                f'The file "{path}" must contain a mapping of route names to definitions.'
            )

        for name, config in configs.items():
            self.validate(config, name, path)
            if "resource" in config:
                self._parse_import(collection, config)
            else:
                self._parse_route(collection, name, config)

        return collection

    def validate(self, config: Any, name: str, path: Path) -> None:
        """
        Check one entry of a definition file.

        Raises ``InvalidDefinitionError`` on a non-mapping entry, unknown
        keys, or when ``path`` and ``resource`` are both given or both
        missing.
        """
        if not isinstance(config, Mapping):
            raise InvalidDefinitionError(f'Invalid definition of "{name}" in "{path}".')

        extra_keys = [key for key in config if key not in AVAILABLE_KEYS]
        if extra_keys:
            raise InvalidDefinitionError(
                f'The routing file "{path}" contains unsupported keys for "{name}": '
                f'"{", ".join(map(str, extra_keys))}". '
                f'Expected one of: "{", ".join(AVAILABLE_KEYS)}".'
            )

        if "resource" in config and "path" in config:
            raise InvalidDefinitionError(
                f'The routing file "{path}" must not specify both the "resource" key '
                f'and the "path" key for "{name}". Choose between an import and a '
                f"route definition."
            )

        if "resource" not in config and "path" not in config:
            raise InvalidDefinitionError(
                f'You must define a "path" for the route "{name}" in file "{path}".'
            )

    @staticmethod
    def _parse_route(collection: RouteCollection, name: str, config: Mapping[str, Any]) -> None:
        route = Route(
            config["path"],
            defaults=config.get("defaults"),
            requirements=config.get("requirements"),
            hostname=config.get("hostname") or "",
            schemes=config.get("schemes"),
            methods=config.get("methods"),
        )
        collection.add(name, route)

    def _parse_import(self, collection: RouteCollection, config: Mapping[str, Any]) -> None:
        resource = config["resource"]
        type = config.get("type")

        if self.resolver is not None:
            loader = self.resolver.resolve(resource, type)
        else:
            loader = self.loader if self.loader.supports(resource, type) else None
        if loader is None:
            raise LoaderLoadError(resource, type)

        logger.debug("Importing routes from %s", resource)
        imported = loader.load(resource, type)

        if config.get("prefix"):
            imported.add_prefix(config["prefix"])
        if config.get("hostname"):
            imported.set_hostname(config["hostname"])
        if config.get("schemes"):
            imported.set_schemes(config["schemes"])
        if config.get("methods"):
            imported.set_methods(config["methods"])
        if config.get("defaults"):
            imported.add_defaults(config["defaults"])
        if config.get("requirements"):
            imported.add_requirements(config["requirements"])

        collection.add_collection(imported)
