"""HTTP request as seen by services.

Frozen metadata plus a single binding slot. The transport creates the
request; the dispatcher binds the path parameters exactly once, before
authorization and before the handler runs. Afterward the request is
read-only.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import unquote

from restroute.errors import BadRequest
from restroute.http.headers import Headers
from restroute.http.method import Method
from restroute.http.params import Parameters
from restroute.routing.router import split_path


@dataclass(frozen=True, slots=True)
class Request:
    """An inbound request to the REST API.

    ``path`` is the raw, still percent-encoded request path; routing works
    on ``path_segments``, derived from it once at creation.

    ``parameters`` holds every parsed query and body parameter (body
    values first); ``url_parameters`` only those from the query string.
    """

    method: Method
    path: str
    path_segments: tuple[str, ...]
    headers: Headers = field(default_factory=Headers)
    parameters: Parameters = field(default_factory=Parameters)
    url_parameters: Parameters = field(default_factory=Parameters)
    body: str = ""

    # Private: filled once by bind_path()
    # (dict contents are mutable even though the field reference is frozen)
    _binding: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Path parameters --

    def bind_path(self, path_parameters: Mapping[str | int, str], *, encoding: str = "utf-8") -> None:
        """Attach the path parameters of the matched route.

        Raises ``RuntimeError`` if the request has already been bound.
        """
        if "params" in self._binding:
            msg = f"Request {self.method} {self.path!r} is already bound"
            raise RuntimeError(msg)
        self._binding["encoding"] = encoding
        self._binding["params"] = MappingProxyType(dict(path_parameters))

    @property
    def is_bound(self) -> bool:
        return "params" in self._binding

    @property
    def path_parameters(self) -> Mapping[str | int, str]:
        """Bound path parameters by name and by position (empty before binding)."""
        return self._binding.get("params", MappingProxyType({}))

    def get_path_parameter(self, key: str | int) -> str:
        """Return a decoded path parameter by placeholder name or by position.

        For a request to ``/a/b/c``, position 1 is ``"b"`` whether or not
        that segment was a placeholder in the route.

        Raises ``BadRequest`` if the request is not bound, the name is
        unknown or empty, or the position is out of range.
        """
        if not self.is_bound:
            raise BadRequest(f"Path parameter {key!r} requested before binding")

        params = self.path_parameters
        if isinstance(key, int):
            if key in params:
                return params[key]
            if not 0 <= key < len(self.path_segments):
                raise BadRequest(f"Invalid path parameter index: {key}")
            return unquote(self.path_segments[key], encoding=self._binding["encoding"])

        value = params.get(key)
        if not value:
            raise BadRequest(f"Unknown path parameter: {key}")
        return value

    # -- Parameters and headers --

    def get_required_parameter(self, name: str) -> str:
        """Return a query/body parameter, raising ``BadRequest`` if missing."""
        return self.parameters.get_required(name)

    def get_optional_parameter(self, name: str, default: str = "") -> str:
        return self.parameters.get_optional(name, default)

    def get_optional_url_parameter(self, name: str, default: str = "") -> str:
        return self.url_parameters.get_optional(name, default)

    def get_header(self, name: str) -> str | None:
        """The first value of header *name* (case-insensitive), or ``None``."""
        return self.headers.get(name)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Factory --

    @classmethod
    def create(
        cls,
        method: Method | str,
        path: str,
        *,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: str = "",
        parameters: Mapping[str, str | None] | Parameters | None = None,
        url_parameters: Mapping[str, str | None] | Parameters | None = None,
    ) -> Request:
        """Create an unbound request from already parsed parts.

        When *url_parameters* is omitted they are parsed from the query
        string in *path*. *parameters* are the body parameters; the
        request's ``parameters`` view merges them with the URL ones.
        """
        if url_parameters is None:
            _, _, query = path.partition("?")
            url_params = Parameters.from_query_string(query)
        else:
            url_params = Parameters.of(url_parameters)
        return cls(
            method=Method.parse(method),
            path=path,
            path_segments=split_path(path),
            headers=Headers.of(headers),
            parameters=Parameters.of(parameters).merged(url_params),
            url_parameters=url_params,
            body=body,
        )
