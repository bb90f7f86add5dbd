"""Request dispatcher — resolves each request to one service and runs it.

The full lifecycle of a request::

    Received -> PathMatched -> MethodResolved -> Bound -> Authorized
             -> Invoked -> ResponseReady

Any step may end early with an empty response (404, 405, 401, 400, 500).
``dispatch()`` never raises: it is the last line of defense between
the services and the transport.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from restroute._internal.types import Handler
from restroute.auth import AuthorizationCheck
from restroute.config import DispatcherConfig
from restroute.errors import ConfigurationError, ErrorKind, classify
from restroute.http.method import Method
from restroute.http.request import Request
from restroute.http.response import Response, header_pairs, merge_headers
from restroute.negotiation import ResponseSerializer, json_serializer, to_response
from restroute.routing.params import bind_path_parameters
from restroute.routing.route import Route, RouteConfig
from restroute.routing.router import RouteTable, build_route
from restroute.services import collect_services

logger = logging.getLogger("restroute.dispatch")


class Dispatcher:
    """Dispatches requests to registered REST services.

    Usage::

        dispatcher = Dispatcher(default_headers={"Cache-Control": "no-cache"})

        @dispatcher.route("/person/{id}")
        def get_person(request):
            return {"id": request.get_path_parameter("id")}

        response = dispatcher.dispatch(Request.create("GET", "/person/7"))

    Args:
        authorization_check: Consulted for routes with a required role.
            Routes with an empty role never call it.
        default_headers: Added to every response. A header set by the
            service itself overrules the default. Takes precedence over
            ``config.default_headers``.
        config: Charset, limits and default headers.
        serializer: Encodes ``RestResponse`` and dict/list results.
        table: Route table to register into (a fresh one by default).

    Thread safety:
        ``dispatch`` may run concurrently on many threads. Registration is
        expected to finish before traffic starts but is safe at any time.
    """

    __slots__ = ("_authorization_check", "_default_headers", "_serializer", "_table", "config")

    def __init__(
        self,
        authorization_check: AuthorizationCheck | None = None,
        default_headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        *,
        config: DispatcherConfig | None = None,
        serializer: ResponseSerializer | None = None,
        table: RouteTable | None = None,
    ) -> None:
        self.config: DispatcherConfig = config or DispatcherConfig()
        self._authorization_check = authorization_check
        if default_headers is None:
            default_headers = self.config.default_headers
        elif isinstance(default_headers, Mapping):
            default_headers = default_headers.items()
        try:
            self._default_headers = tuple(header_pairs(default_headers))
        except TypeError as exc:
            raise ConfigurationError(f"Invalid default headers: {exc}") from exc
        self._serializer: ResponseSerializer = serializer or json_serializer
        self._table = table if table is not None else RouteTable()

    # -- Registration --

    def register_service(self, handler: Handler, config: RouteConfig) -> Route:
        """Register *handler* to serve requests matching *config*.

        Raises ``ConfigurationError`` for a path without a leading slash
        and ``DuplicateRouteError`` when the method and path slot is
        already taken. Both are startup errors in the host application.
        """
        route = build_route(handler, config)
        self._table.register(route)
        return route

    def route(
        self,
        path: str,
        *,
        method: Method | str | None = Method.GET,
        authorized: str = "",
    ) -> Callable[[Handler], Handler]:
        """Register a service via decorator.

        Args:
            path: Path pattern. Use ``{name}``, ``:name`` or ``@name`` for
                path parameters.
            method: Accepted method. ``None`` accepts any method.
            authorized: Required role. Empty means public.
        """

        def decorator(func: Handler) -> Handler:
            self.register_service(func, RouteConfig(path=path, method=method, authorized=authorized))
            return func

        return decorator

    def register_services(self, obj: Any) -> list[Route]:
        """Register every ``@rest``-marked member of *obj*."""
        return [self.register_service(handler, config) for handler, config in collect_services(obj)]

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return self._table.routes

    @property
    def default_headers(self) -> tuple[tuple[str, str], ...]:
        return self._default_headers

    # -- Dispatch --

    def dispatch(self, request: Request) -> Response:
        """Dispatch *request* to the matching service and return its response.

        Produces one of:

        - 404 if no service is mapped to the path
        - 200 for pre-flight (OPTIONS) requests to a mapped path
        - 405 if the path is mapped, but not for this method
        - 401 if the request fails authorization
        - 400 if the service reports invalid parameters
        - 500 if the service fails in any other way
        - the service's own response otherwise

        Every response carries the default headers. A service response
        with malformed headers is answered with 500.
        """
        response = self._dispatch(request)
        try:
            return merge_headers(self._default_headers, response)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            return merge_headers(self._default_headers, Response.empty(500))

    def _dispatch(self, request: Request) -> Response:
        mapped_for_path = self._table.match(request.path_segments)
        if not mapped_for_path:
            return self._reject(ErrorKind.PATH_NOT_FOUND, request)

        if request.method == Method.OPTIONS:
            return self._handle_preflight()

        route = mapped_for_path.get(request.method)
        if route is None:
            route = mapped_for_path.get(None)
        if route is None:
            return self._reject(ErrorKind.METHOD_NOT_SUPPORTED, request)

        try:
            bind_path_parameters(request, route, encoding=self.config.charset)
            if not self._is_authorized(request, route):
                return self._reject(ErrorKind.UNAUTHORIZED, request)
            return to_response(route.handler(request), self._serializer)
        except Exception as exc:
            return self._fail(exc, request)

    def _is_authorized(self, request: Request, route: Route) -> bool:
        if route.is_public:
            return True
        if self._authorization_check is None:
            logger.warning(
                "%s %s requires role %r but no authorization check is configured",
                request.method,
                request.path,
                route.required_role,
            )
            return False
        return bool(self._authorization_check(request, route.required_role))

    def _handle_preflight(self) -> Response:
        """Answer a browser's cross-origin pre-flight probe.

        The path exists, so cross-origin calls are allowed; the actual
        CORS headers come from the default headers.
        """
        return Response.empty(200)

    def _reject(self, kind: ErrorKind, request: Request) -> Response:
        logger.debug("%d %s %s", kind.status, request.method, request.path)
        return Response.empty(kind.status)

    def _fail(self, exc: Exception, request: Request) -> Response:
        kind = classify(exc)
        if kind is ErrorKind.INTERNAL_FAILURE:
            logger.exception("500 %s %s", request.method, request.path)
        else:
            logger.debug("%d %s %s: %s", kind.status, request.method, request.path, exc)
        return Response.empty(kind.status)
