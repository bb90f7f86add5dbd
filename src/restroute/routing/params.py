"""Path parameter binding.

Walks a route's pattern and the request's path segments in lockstep and
attaches the decoded placeholder values to the request.
"""

from urllib.parse import unquote

from restroute.http.request import Request
from restroute.routing.route import Route


def decode_segment(segment: str, encoding: str = "utf-8") -> str:
    """Percent-decode a single path segment.

    ``+`` is left alone; only ``%XX`` escapes are decoded. The result is
    never split again, so ``456%2F7`` stays one value: ``456/7``.
    """
    return unquote(segment, encoding=encoding, errors="replace")


def bind_path_parameters(
    request: Request,
    route: Route,
    *,
    encoding: str = "utf-8",
) -> dict[str | int, str]:
    """Bind *route*'s placeholder values onto *request*.

    Each value is recorded under its placeholder name and under its
    0-based position in the path. Returns the bound mapping.

    Raises ``RuntimeError`` if the request was already bound.
    """
    bound: dict[str | int, str] = {}
    for index, (pattern, segment) in enumerate(zip(route.pattern, request.path_segments)):
        if pattern.is_param:
            value = decode_segment(segment, encoding)
            bound[pattern.param_name or ""] = value
            bound[index] = value
    request.bind_path(bound, encoding=encoding)
    return bound
