"""
Loaders turning route definition files into RouteCollections.
"""

from collections.abc import Iterable
from pathlib import Path

from compass.loader.base import DelegatingLoader, Loader, LoaderResolver
from compass.loader.locator import FileLocator
from compass.loader.parser import RouteDefinitionParser
from compass.loader.python_file import PyFileLoader
from compass.loader.yaml_file import YamlFileLoader


def create_loader(paths: str | Path | Iterable[str | Path] | None = None) -> DelegatingLoader:
    """Build a loader that handles YAML and Python files found in ``paths``."""
    locator = FileLocator(paths)
    resolver = LoaderResolver([YamlFileLoader(locator), PyFileLoader(locator)])
    return DelegatingLoader(resolver)


__all__ = [
    "DelegatingLoader",
    "FileLocator",
    "Loader",
    "LoaderResolver",
    "PyFileLoader",
    "RouteDefinitionParser",
    "YamlFileLoader",
    "create_loader",
]
