"""Writes a restroute Response to an ASGI ``send`` callable."""

from restroute._internal.asgi import Send
from restroute.http.response import Response

# Statuses that never carry a message body
_BODILESS = frozenset({204, 304})


def _encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    encoded = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]
    encoded.append((b"content-length", str(content_length).encode("latin-1")))
    return encoded


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* as one ``http.response.start`` and one body message.

    ``Content-Length`` is always computed from the encoded body. A HEAD
    request gets the length of the body it would have received, but no body.
    """
    if response.status < 200 or response.status in _BODILESS:
        body = b""
    else:
        body = response.body_bytes

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else body})
