"""
Request context shared by the matcher and the generator.
"""

from collections.abc import Mapping
from typing import Any

from compass.types import Scope

DEFAULT_HTTP_PORT: int = 80
DEFAULT_HTTPS_PORT: int = 443

_SECURE_SCHEMES: set[str] = {"https", "wss"}


class RequestContext:
    """
    Holds information about the current request.

    The method is stored upper-cased and the scheme lower-cased. Extra
    ``parameters`` are merged into every generated URL, below explicit
    arguments and above route defaults.
    """

    def __init__(
        self,
        base_url: str = "",
        method: str = "GET",
        host: str = "localhost",
        scheme: str = "http",
        http_port: int = DEFAULT_HTTP_PORT,
        https_port: int = DEFAULT_HTTPS_PORT,
        uri: str = "/",
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        self.base_url = base_url
        self.method = method
        self.host = host
        self.scheme = scheme
        self.http_port = http_port
        self.https_port = https_port
        self.uri = uri
        self._parameters: dict[str, Any] = dict(parameters or {})

    @classmethod
    def from_scope(cls, scope: Scope) -> "RequestContext":
        """Build a context from an ASGI HTTP scope."""
        context = cls()
        context.update_from_scope(scope)
        return context

    def update_from_scope(self, scope: Scope) -> None:
        """Refresh uri, method, host, scheme and port from an ASGI scope."""
        self.base_url = scope.get("root_path", "")
        self.uri = scope.get("path", "/")
        self.method = scope.get("method", "GET")
        self.scheme = scope.get("scheme", "http")

        host_header = ""
        for name, value in scope.get("headers", []):
            if name.decode("latin-1").lower() == "host":
                host_header = value.decode("latin-1")
                break

        server = scope.get("server")
        port: int | None = None
        if host_header:
            host, sep, raw_port = host_header.rpartition(":")
            # a bracketed IPv6 literal without a port splits inside the brackets
            if not sep or "]" in raw_port:
                host, raw_port = host_header, ""
            self.host = host
            if raw_port.isdigit():
                port = int(raw_port)
        elif server:
            self.host = server[0]
            port = server[1]

        if port is not None:
            if self.scheme in _SECURE_SCHEMES:
                self.https_port = port
            else:
                self.http_port = port

    # ------------------------------------------------------------------
    # Normalized attributes
    # ------------------------------------------------------------------

    @property
    def method(self) -> str:
        return self._method

    @method.setter
    def method(self, method: str) -> None:
        self._method = method.upper()

    @property
    def scheme(self) -> str:
        return self._scheme

    @scheme.setter
    def scheme(self, scheme: str) -> None:
        self._scheme = scheme.lower()

    @property
    def http_port(self) -> int:
        return self._http_port

    @http_port.setter
    def http_port(self, port: int) -> None:
        self._http_port = self._validate_port(port, "http_port")

    @property
    def https_port(self) -> int:
        return self._https_port

    @https_port.setter
    def https_port(self, port: int) -> None:
        self._https_port = self._validate_port(port, "https_port")

    @staticmethod
    def _validate_port(port: int, label: str) -> int:
        if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
            raise ValueError(f"{label} must be a positive integer, got {port!r}")
        return port

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> dict[str, Any]:
        return self._parameters

    @parameters.setter
    def parameters(self, parameters: Mapping[str, Any]) -> None:
        self._parameters = dict(parameters)

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self._parameters.get(name, default)

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def set_parameter(self, name: str, value: Any) -> None:
        self._parameters[name] = value
