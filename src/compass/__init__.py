"""
Compass - declarative URL routing

Compiles route templates such as ``/blog/{page}`` into matchers that
recover parameters from a URI, and generators that rebuild a URI from a
route name and parameters.
"""

from compass.collection import RouteCollection
from compass.compiler import CompiledRoute, RouteCompiler, TextToken, VariableToken
from compass.context import RequestContext
from compass.exceptions import (
    CompassException,
    InvalidArgumentError,
    InvalidParameterError,
    LogicError,
    MissingMandatoryParametersError,
    RouteNotFoundError,
    RoutingError,
)
from compass.generator import UrlGenerator
from compass.matcher import UrlMatcher
from compass.route import Route
from compass.router import Router

__version__ = "0.1.0"
__all__ = [
    "Route",
    "RouteCompiler",
    "CompiledRoute",
    "TextToken",
    "VariableToken",
    "RouteCollection",
    "RequestContext",
    "UrlMatcher",
    "UrlGenerator",
    "Router",
    "CompassException",
    "RoutingError",
    "InvalidArgumentError",
    "LogicError",
    "RouteNotFoundError",
    "MissingMandatoryParametersError",
    "InvalidParameterError",
]
