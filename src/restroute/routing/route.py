"""RouteConfig, Route and PathSegment frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from restroute._internal.types import Handler
from restroute.http.method import Method

# (prefix, suffix) wrapping a parameter name
_PLACEHOLDER_FORMS: tuple[tuple[str, str], ...] = (
    ("{", "}"),
    (":", ""),
    ("@", ""),
)


def placeholder_name(segment: str) -> str | None:
    """Return the parameter name if *segment* is a placeholder, else ``None``.

    Three equivalent syntaxes are accepted::

        "{id}" -> "id"
        ":id"  -> "id"
        "@id"  -> "id"
    """
    for prefix, suffix in _PLACEHOLDER_FORMS:
        if (
            segment.startswith(prefix)
            and segment.endswith(suffix)
            and len(segment) >= len(prefix) + len(suffix)
        ):
            return segment[len(prefix) : len(segment) - len(suffix)]
    return None


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path pattern.

    Literal:  ``/users``  (is_param=False)
    Param:    ``/{id}``, ``/:id`` or ``/@id`` (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None

    @classmethod
    def parse(cls, value: str) -> PathSegment:
        name = placeholder_name(value)
        if name is None:
            return cls(value=value)
        return cls(value=value, is_param=True, param_name=name)

    def accepts(self, segment: str) -> bool:
        """True if this pattern segment matches the literal request *segment*."""
        return self.is_param or self.value == segment

    def overlaps(self, other: PathSegment) -> bool:
        """True if some request segment would match both pattern segments."""
        return self.is_param or other.is_param or self.value == other.value


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """How a service is exposed: path pattern, method and required role.

    ``method=None`` accepts every request method. An empty ``authorized``
    role makes the service public.
    """

    path: str
    method: Method | None = Method.GET
    authorized: str = ""

    def __post_init__(self) -> None:
        if self.method is not None and not isinstance(self.method, Method):
            object.__setattr__(self, "method", Method.parse(self.method))


@dataclass(frozen=True, slots=True)
class Route:
    """A registered service. Created at startup, immutable afterward."""

    config: RouteConfig
    handler: Handler
    pattern: tuple[PathSegment, ...]

    @property
    def method(self) -> Method | None:
        return self.config.method

    @property
    def path(self) -> str:
        return self.config.path

    @property
    def required_role(self) -> str:
        return self.config.authorized

    @property
    def is_public(self) -> bool:
        return not self.config.authorized

    def accepts(self, segments: tuple[str, ...]) -> bool:
        """True if this route's pattern matches the request path *segments*."""
        return len(segments) == len(self.pattern) and all(
            pattern.accepts(segment) for pattern, segment in zip(self.pattern, segments)
        )

    def overlaps(self, other: Route) -> bool:
        """True if both routes could be selected for the same method and path."""
        return (
            self.method == other.method
            and len(self.pattern) == len(other.pattern)
            and all(a.overlaps(b) for a, b in zip(self.pattern, other.pattern))
        )
