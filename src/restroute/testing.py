"""Test helpers for services built on restroute.

``mock_request`` builds a ``Request`` the way the ASGI adapter would,
without a server::

    response = dispatcher.dispatch(mock_request("POST", "/person", body="name=jim"))
    assert response.status == 201
"""

from collections.abc import Iterable, Mapping

from restroute.http.forms import parse_request_body
from restroute.http.headers import Headers
from restroute.http.method import Method
from restroute.http.params import Parameters
from restroute.http.request import Request


def mock_request(
    method: Method | str,
    path: str,
    *,
    body: str = "",
    headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    parameters: Mapping[str, str | None] | None = None,
    content_type: str | None = None,
) -> Request:
    """Create an unbound request.

    Body parameters are parsed from *body* (form or JSON, following
    *content_type* or the ``Content-Type`` header). Explicit *parameters*
    are added on top, as if a body parser had produced them.
    """
    header_pairs = list(Headers.of(headers).raw)
    if content_type is not None:
        header_pairs.append(("Content-Type", content_type))
    request_headers = Headers(header_pairs)

    body_parameters = parse_request_body(method, request_headers.get("content-type"), body)
    if parameters:
        body_parameters = Parameters.of(parameters).merged(body_parameters)

    return Request.create(
        method,
        path,
        headers=request_headers,
        body=body,
        parameters=body_parameters,
    )
