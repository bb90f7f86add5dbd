"""Request body parsing into ``Parameters``.

Supports:
- ``application/json`` bodies holding a JSON object
- ``application/x-www-form-urlencoded`` (and, leniently, any other body)

Anything that is not declared as JSON is read as form data, including
bodies sent without a Content-Type header.
"""

import json as json_module
from typing import Any

from restroute.errors import BadRequest
from restroute.http.method import Method
from restroute.http.params import Parameters


def parse_request_body(
    method: Method | str,
    content_type: str | None,
    body: str,
    *,
    encoding: str = "utf-8",
) -> Parameters:
    """Parse a request body into parameters.

    Methods without a request body (GET, DELETE, ...) and empty bodies
    produce empty parameters.

    Raises:
        BadRequest: If the body is declared as JSON but is not valid JSON
            (including documents nested too deeply to decode).
    """
    if not Method.parse(method).has_request_body or not body:
        return Parameters()

    ct_lower = (content_type or "").lower().split(";")[0].strip()
    if ct_lower == "application/json" or ct_lower.endswith("+json"):
        return _parse_json_object(body)
    return Parameters.from_query_string(body, encoding=encoding)


def _parse_json_object(body: str) -> Parameters:
    """Treat the members of a JSON object body as parameters.

    Primitive members become their text form; nested arrays and objects
    are kept as compact JSON. Non-object documents yield no parameters.
    """
    try:
        document = json_module.loads(body)
    except (ValueError, RecursionError) as exc:
        raise BadRequest("Request body is not valid JSON") from exc

    if not isinstance(document, dict):
        return Parameters()

    return Parameters.of({name: _json_text(value) for name, value in document.items()})


def _json_text(value: Any) -> str | None:
    match value:
        case None:
            return None
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case int() | float():
            return str(value)
        case _:
            return json_module.dumps(value, separators=(",", ":"))
