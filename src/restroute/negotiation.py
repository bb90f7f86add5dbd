"""Content negotiation — maps service return values to Response objects.

isinstance-based dispatch, no magic, fully predictable. The body encoding
of object results is delegated to a ``ResponseSerializer``.
"""

import json as json_module
from typing import Any, Protocol

from restroute.http.response import Response, RestResponse


class ResponseSerializer(Protocol):
    """Turns a ``RestResponse`` into a wire-ready ``Response``."""

    def __call__(self, response: RestResponse) -> Response: ...


def json_serializer(response: RestResponse) -> Response:
    """Default serializer: encode the body object as JSON."""
    return (
        Response(body=json_module.dumps(response.body), status=response.status)
        .with_header("Content-Type", "application/json")
        .with_headers(response.headers)
    )


def to_response(value: Any, serializer: ResponseSerializer = json_serializer) -> Response:
    """Convert a service's return value to a Response.

    Dispatch order:

    1. ``Response``          -> pass through
    2. ``RestResponse``      -> ``serializer(value)``
    3. ``None``              -> 204, empty
    4. ``str``               -> 200, text/plain
    5. ``bytes``             -> 200, application/octet-stream
    6. ``dict`` / ``list``   -> 200, serialized (JSON by default)
    7. ``(value, int)``      -> convert value, override status

    Raises ``TypeError`` for anything else.
    """
    match value:
        case Response():
            return value
        case RestResponse():
            return serializer(value)
        case None:
            return Response.empty(204)
        case str():
            return Response(body=value).with_header("Content-Type", "text/plain; charset=utf-8")
        case bytes():
            return Response(body=value).with_header("Content-Type", "application/octet-stream")
        case dict() | list():
            return serializer(RestResponse(body=value))
        case (inner, int() as status):
            return to_response(inner, serializer).with_status(status)
        case _:
            msg = f"Cannot convert {type(value).__name__} to a response"
            raise TypeError(msg)
