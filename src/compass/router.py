"""
Router facade.

Wires a RouteCollection and a RequestContext to a matcher and a
generator, creating each lazily on first use.
"""

import logging
from collections.abc import Mapping
from typing import Any

from compass.collection import RouteCollection
from compass.context import RequestContext
from compass.generator import UrlGenerator
from compass.loader.base import Loader
from compass.matcher import UrlMatcher
from compass.types import Parameters

logger = logging.getLogger("compass.router")


class Router:
    """
    Single entry point for matching and generating URLs.

    Either pass a ready collection, or a loader and a resource; in the
    latter case the resource is loaded on first use.

    Usage:
        loader = YamlFileLoader(FileLocator(["config"]))
        router = Router(loader=loader, resource="routing.yml")

        router.match("/about")           # {"_route": "about", ...}
        router.generate("blog", {"page": 2})
    """

    def __init__(
        self,
        collection: RouteCollection | None = None,
        context: RequestContext | None = None,
        *,
        loader: Loader | None = None,
        resource: Any = None,
        strict_requirements: bool = True,
    ) -> None:
        if collection is None and (loader is None or resource is None):
            raise ValueError("Router needs either a collection or a loader and a resource.")
        if collection is not None and loader is not None:
            raise ValueError("Router accepts a collection or a loader, not both.")

        self._collection = collection
        self._loader = loader
        self._resource = resource
        self._context = context or RequestContext()
        self.strict_requirements = strict_requirements

        self._matcher: UrlMatcher | None = None
        self._generator: UrlGenerator | None = None

    @property
    def route_collection(self) -> RouteCollection:
        if self._collection is None:
            if self._loader is None:
                raise ValueError("A loader is required to load routes from a resource.")
            self._collection = self._loader.load(self._resource)
            logger.debug(
                "Loaded %d routes from %s",
                len(self._collection),
                self._resource,
            )
        return self._collection

    @property
    def context(self) -> RequestContext:
        return self._context

    @context.setter
    def context(self, context: RequestContext) -> None:
        self._context = context
        if self._matcher is not None:
            self._matcher.context = context
        if self._generator is not None:
            self._generator.context = context

    @property
    def matcher(self) -> UrlMatcher:
        if self._matcher is None:
            logger.debug("Creating URL matcher")
            self._matcher = UrlMatcher(self.route_collection, self._context)
        return self._matcher

    @matcher.setter
    def matcher(self, matcher: UrlMatcher) -> None:
        self._matcher = matcher

    @property
    def generator(self) -> UrlGenerator:
        if self._generator is None:
            logger.debug("Creating URL generator")
            self._generator = UrlGenerator(
                self.route_collection,
                self._context,
                strict_requirements=self.strict_requirements,
            )
        return self._generator

    @generator.setter
    def generator(self, generator: UrlGenerator) -> None:
        self._generator = generator

    def match(self, uri: str) -> Parameters | None:
        """Match a URI; ``None`` when no route matches."""
        params = self.matcher.match(uri)
        if params is None:
            logger.debug("No route matches %s %s", self._context.method, uri)
        return params

    def generate(
        self,
        name: str,
        parameters: Mapping[str, Any] | None = None,
        absolute: bool = False,
    ) -> str:
        """Generate a URL for the named route."""
        return self.generator.generate(name, parameters, absolute)

    def warm(self) -> None:
        """Load and compile every route up front."""
        collection = self.route_collection
        collection.compile_all()
        logger.debug("Compiled %d routes", len(collection))
