"""
URL generation.

Replays a compiled route's tokens, tail first, to rebuild a URL from a
parameter set. Trailing variables whose value equals their default are
left out together with their separator, mirroring how the matcher treats
them as optional.
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

from compass.collection import RouteCollection
from compass.compiler import Token, VariableToken
from compass.context import RequestContext
from compass.exceptions import (
    InvalidParameterError,
    MissingMandatoryParametersError,
    RouteNotFoundError,
)
from compass.route import Route

# Characters (besides unreserved ones) kept literal in generated paths
DECODED_CHARS: dict[str, str] = {
    # hierarchical separator
    "%2F": "/",
    # only special inside the authority component
    "%40": "@",
    "%3A": ":",
    # sub-delimiters without a predefined meaning in a path
    "%3B": ";",
    "%2C": ",",
    "%3D": "=",
    "%2B": "+",
    "%21": "!",
    "%2A": "*",
    "%7C": "|",
}

_DECODED_PATTERN: re.Pattern[str] = re.compile(
    "|".join(re.escape(key) for key in DECODED_CHARS)
)

# "." and ".." segments would be resolved as relative references
_DOT_SEGMENTS: dict[str, str] = {"/../": "/%2E%2E/", "/./": "/%2E/"}
_DOT_PATTERN: re.Pattern[str] = re.compile(r"/\.\./|/\./")

_DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


class UrlGenerator:
    """
    Generates URLs for the routes of a RouteCollection.

    With ``strict_requirements`` enabled (the default) every emitted value
    is checked against its requirement and ``InvalidParameterError`` is
    raised on mismatch.
    """

    def __init__(
        self,
        routes: RouteCollection,
        context: RequestContext,
        strict_requirements: bool = True,
    ) -> None:
        self._routes = routes
        self.context = context
        self.strict_requirements = strict_requirements

    def generate(
        self,
        name: str,
        parameters: Mapping[str, Any] | None = None,
        absolute: bool = False,
    ) -> str:
        """
        Generate a path (or an absolute URL) for the named route.

        Raises:
            RouteNotFoundError: no route is registered under ``name``
            MissingMandatoryParametersError: a route variable has no value
            InvalidParameterError: a value fails its requirement
        """
        route = self._routes.get(name)
        if route is None:
            raise RouteNotFoundError(name)
        return self.do_generate(route, name, dict(parameters or {}), absolute)

    def do_generate(
        self,
        route: Route,
        name: str,
        parameters: dict[str, Any],
        absolute: bool,
    ) -> str:
        compiled = route.compile()
        defaults = route.defaults
        variables = compiled.variables

        merged: dict[str, Any] = {**defaults, **self.context.parameters, **parameters}

        missing = [variable for variable in variables if variable not in merged]
        if missing:
            raise MissingMandatoryParametersError(name, missing)

        url = self._build_path(compiled.tokens, merged, defaults, name)
        if not url:
            url = "/"

        url = self.context.base_url + self._encode_path(url)

        # Only caller-supplied keys that are not route variables
        extra = {
            key: value
            for key, value in parameters.items()
            if key not in variables and value is not None
        }
        if extra:
            query = urlencode(extra, doseq=True)
            if query:
                url += "?" + query

        host = self.context.host
        scheme = self.context.scheme
        required_scheme = route.get_requirement("_scheme")
        route_schemes = route.schemes
        if required_scheme is not None and required_scheme.lower() != scheme:
            scheme = required_scheme.lower()
            absolute = True
        elif route_schemes and scheme not in route_schemes:
            scheme = route_schemes[0]
            absolute = True

        if compiled.hostname_tokens:
            route_host = self._build_host(compiled.hostname_tokens, merged, name)
            if route_host != host:
                host = route_host
                absolute = True

        if absolute and host:
            port = ""
            if scheme == "http" and self.context.http_port != _DEFAULT_PORTS["http"]:
                port = f":{self.context.http_port}"
            elif scheme == "https" and self.context.https_port != _DEFAULT_PORTS["https"]:
                port = f":{self.context.https_port}"
            url = f"{scheme}://{host}{port}{url}"

        return url

    def _build_path(
        self,
        tokens: tuple[Token, ...],
        merged: dict[str, Any],
        defaults: dict[str, Any],
        name: str,
    ) -> str:
        url = ""
        optional = True
        for token in tokens:
            if isinstance(token, VariableToken):
                value = merged[token.name]
                if (
                    optional
                    and token.name in defaults
                    and str(value) == str(defaults[token.name])
                ):
                    continue
                self._check_requirement(token, value, name)
                url = f"{token.prefix}{value}{url}"
            else:
                url = token.text + url
            optional = False
        return url

    def _build_host(
        self,
        tokens: tuple[Token, ...],
        merged: dict[str, Any],
        name: str,
    ) -> str:
        host = ""
        for token in tokens:
            if isinstance(token, VariableToken):
                value = merged[token.name]
                self._check_requirement(token, value, name)
                host = f"{token.prefix}{value}{host}"
            else:
                host = token.text + host
        return host

    def _check_requirement(self, token: VariableToken, value: Any, name: str) -> None:
        if self.strict_requirements and re.fullmatch(token.regex, str(value)) is None:
            raise InvalidParameterError(name, token.name, token.regex, value)

    @staticmethod
    def _encode_path(path: str) -> str:
        encoded = quote(path, safe="")
        encoded = _DECODED_PATTERN.sub(lambda m: DECODED_CHARS[m.group(0)], encoded)
        encoded = _DOT_PATTERN.sub(lambda m: _DOT_SEGMENTS[m.group(0)], encoded)
        if encoded.endswith("/.."):
            encoded = encoded[:-2] + "%2E%2E"
        elif encoded.endswith("/."):
            encoded = encoded[:-1] + "%2E"
        return encoded
