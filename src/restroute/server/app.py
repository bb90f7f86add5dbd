"""ASGI application — exposes a Dispatcher to any ASGI server.

The only component that touches raw ASGI directly. Reads the request
body, builds a ``Request`` with parsed query and body parameters, runs
the synchronous dispatcher in a worker thread, and sends the response
back through ASGI ``send()``.

Usage::

    dispatcher = Dispatcher(default_headers=CORS_HEADERS)
    dispatcher.register_services(PersonService())
    app = RestApp(dispatcher)

    # uvicorn mymodule:app
"""

import logging

import anyio.to_thread

from restroute._internal.asgi import HTTPScope, Receive, Scope, Send
from restroute.config import DispatcherConfig
from restroute.dispatcher import Dispatcher
from restroute.errors import BadRequest
from restroute.http.forms import parse_request_body
from restroute.http.headers import Headers
from restroute.http.method import Method
from restroute.http.params import Parameters
from restroute.http.request import Request
from restroute.http.response import Response, merge_headers
from restroute.server.sender import send_response

logger = logging.getLogger("restroute.server")


class _BodyTooLarge(Exception):  # noqa: N818
    pass


class _ClientDisconnected(Exception):  # noqa: N818
    pass


class RestApp:
    """ASGI 3.0 application wrapping a ``Dispatcher``.

    Args:
        dispatcher: Receives every HTTP request.
        config: Body size limit and request charset. Defaults to the
            dispatcher's own config.
    """

    __slots__ = ("config", "dispatcher")

    def __init__(self, dispatcher: Dispatcher, *, config: DispatcherConfig | None = None) -> None:
        self.dispatcher = dispatcher
        self.config: DispatcherConfig = config or dispatcher.config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        http_scope = HTTPScope.from_scope(scope)
        try:
            body = await self._read_body(receive)
        except _ClientDisconnected:
            logger.debug("Client disconnected before sending %s %s", http_scope.method, http_scope.path)
            return
        except _BodyTooLarge:
            await self._send_empty(413, send)
            return

        try:
            request = self._build_request(http_scope, body)
        except ValueError:
            # Unknown request method
            await self._send_empty(501, send)
            return
        except BadRequest as exc:
            logger.debug("400 %s %s: %s", http_scope.method, http_scope.path, exc)
            await self._send_empty(400, send)
            return

        response = await anyio.to_thread.run_sync(self.dispatcher.dispatch, request)
        await send_response(response, send, head=request.method == Method.HEAD)

    def _build_request(self, scope: HTTPScope, body: bytes) -> Request:
        """Create the unbound Request the dispatcher expects.

        Raises ``ValueError`` for unknown methods and ``BadRequest`` for
        bodies declared as JSON that do not parse.
        """
        charset = self.config.charset
        method = Method.parse(scope.method)
        headers = Headers.from_asgi(scope.headers)
        text = body.decode(charset, errors="replace")
        url_parameters = Parameters.from_query_string(scope.query, encoding=charset)
        body_parameters = parse_request_body(
            method,
            headers.get("content-type"),
            text,
            encoding=charset,
        )

        return Request.create(
            method,
            scope.request_path,
            headers=headers,
            body=text,
            parameters=body_parameters,
            url_parameters=url_parameters,
        )

    async def _read_body(self, receive: Receive) -> bytes:
        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                raise _ClientDisconnected
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.config.max_body_size:
                raise _BodyTooLarge
            chunks.append(chunk)
            if not message.get("more_body", False):
                return b"".join(chunks)

    async def _send_empty(self, status: int, send: Send) -> None:
        response = merge_headers(self.dispatcher.default_headers, Response.empty(status))
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info("Serving %d REST services", len(self.dispatcher.routes))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
