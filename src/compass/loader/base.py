"""
Loader interface and format dispatch.
"""

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from compass.collection import RouteCollection
from compass.exceptions import LoaderLoadError


@runtime_checkable
class Loader(Protocol):
    """Anything that can turn a resource into a RouteCollection."""

    def supports(self, resource: Any, type: str | None = None) -> bool: ...

    def load(self, resource: Any, type: str | None = None) -> RouteCollection: ...


class LoaderResolver:
    """
    Picks the first registered loader that supports a resource.

    Loaders exposing a ``resolver`` attribute are given this resolver so
    imports inside a file can be dispatched to other formats.
    """

    def __init__(self, loaders: Iterable[Loader] = ()) -> None:
        self._loaders: list[Loader] = []
        for loader in loaders:
            self.add_loader(loader)

    @property
    def loaders(self) -> list[Loader]:
        return list(self._loaders)

    def add_loader(self, loader: Loader) -> None:
        self._loaders.append(loader)
        if hasattr(loader, "resolver"):
            loader.resolver = self  # type: ignore[attr-defined]

    def resolve(self, resource: Any, type: str | None = None) -> Loader | None:
        for loader in self._loaders:
            if loader.supports(resource, type):
                return loader
        return None


class DelegatingLoader:
    """Loader that hands each resource to whichever loader supports it."""

    def __init__(self, resolver: LoaderResolver) -> None:
        self.resolver = resolver

    def supports(self, resource: Any, type: str | None = None) -> bool:
        return self.resolver.resolve(resource, type) is not None

    def load(self, resource: Any, type: str | None = None) -> RouteCollection:
        loader = self.resolver.resolve(resource, type)
        if loader is None:
            raise LoaderLoadError(resource, type)
        return loader.load(resource, type)
