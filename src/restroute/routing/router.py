"""Route table with copy-on-write registration and segment matching.

Routes are registered during startup and read by every dispatch. Readers
never lock: each match works on one snapshot of the route tuple, and
registration swaps in a new tuple under a writer lock.
"""

import logging
import threading

from restroute.errors import ConfigurationError, DuplicateRouteError
from restroute.http.method import Method
from restroute.routing.route import PathSegment, Route, RouteConfig

logger = logging.getLogger("restroute.routing")


def split_path(path: str) -> tuple[str, ...]:
    """Split a raw request path into its non-empty segments.

    The query string is not part of the path, trailing and repeated
    slashes are ignored, and the leading slash is optional. Segments are
    returned as received (still percent-encoded).

    Examples::

        ""            -> ()
        "/"           -> ()
        "/a/b/"       -> ("a", "b")
        "a/b"         -> ("a", "b")
        "/a/b?c=2"    -> ("a", "b")
        "a/b%2Fc/d"   -> ("a", "b%2Fc", "d")
    """
    path, _, _ = path.partition("?")
    return tuple(part for part in path.rstrip("/").split("/") if part)


def parse_pattern(path: str) -> tuple[PathSegment, ...]:
    """Parse a route path pattern into segments.

    Examples::

        "/users"         -> (PathSegment("users"),)
        "/users/{id}"    -> (PathSegment("users"), PathSegment("{id}", is_param=True, ...))
        "/users/:id"     -> (PathSegment("users"), PathSegment(":id", is_param=True, ...))
    """
    return tuple(PathSegment.parse(part) for part in split_path(path))


def build_route(handler, config: RouteConfig) -> Route:
    """Build the route that will serve *handler*.

    Raises ``ConfigurationError`` when the handler is not callable or a
    placeholder has no name (``{}``, ``:`` or ``@``).
    """
    if not callable(handler):
        msg = f"Service handler for {config.path!r} is not callable: {handler!r}"
        raise ConfigurationError(msg)
    pattern = parse_pattern(config.path)
    for segment in pattern:
        if segment.is_param and not segment.param_name:
            msg = f"Unnamed path parameter {segment.value!r} in {config.path!r}"
            raise ConfigurationError(msg)
    return Route(config=config, handler=handler, pattern=pattern)


class RouteTable:
    """Append-only table of registered routes.

    Usage::

        table = RouteTable()
        table.register(build_route(handler, RouteConfig("/users/{id}")))
        table.match(split_path("/users/42"))  # {Method.GET: <Route /users/{id}>}

    Thread safety:
        Registration serializes on a lock and publishes a new tuple.
        ``match`` reads whichever tuple is current, so a concurrent
        registration is either fully visible or not visible at all.
    """

    __slots__ = ("_routes", "_write_lock")

    def __init__(self) -> None:
        self._routes: tuple[Route, ...] = ()
        self._write_lock = threading.Lock()

    def register(self, route: Route) -> None:
        """Append *route* to the table.

        Raises ``ConfigurationError`` if the path is not absolute and
        ``DuplicateRouteError`` if another route with the same method
        already claims an overlapping path. Overlap is judged
        conservatively: a placeholder overlaps every literal, so
        ``/test/test2`` and ``/test/:id`` cannot both be registered for
        the same method.
        """
        if not route.path.startswith("/"):
            msg = f"Service path must have a leading slash: {route.path!r}"
            raise ConfigurationError(msg)

        with self._write_lock:
            for existing in self._routes:
                if existing.overlaps(route):
                    method = route.method or "*"
                    msg = (
                        f"Mapping already exists: {method} {route.path!r} "
                        f"conflicts with {existing.path!r}"
                    )
                    raise DuplicateRouteError(msg)
            self._routes = (*self._routes, route)

        logger.debug("Registered %s %s", route.method or "*", route.path)

    def match(self, segments: tuple[str, ...]) -> dict[Method | None, Route]:
        """Return every route whose pattern matches *segments*, keyed by method.

        Wildcard routes are keyed by ``None``. An empty mapping means no
        route exists for the path at all.
        """
        return {route.method: route for route in self._routes if route.accepts(segments)}

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self):
        return iter(self._routes)
