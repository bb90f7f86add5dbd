"""restroute — REST request routing and dispatch.

Resolves each request to exactly one registered service, binds its path
parameters, enforces per-route authorization, runs the service, and turns
the result (or any failure) into a well-formed response.

Basic usage::

    from restroute import Dispatcher, Request

    dispatcher = Dispatcher()

    @dispatcher.route("/person/{id}")
    def get_person(request):
        return {"id": request.get_path_parameter("id")}

    response = dispatcher.dispatch(Request.create("GET", "/person/7"))

Serving over ASGI::

    from restroute import RestApp
    app = RestApp(dispatcher)
"""

import importlib

__version__ = "0.1.0"
__all__ = [
    "ANY_METHOD",
    "CORS_HEADERS",
    "PUBLIC",
    "AuthorizationCheck",
    "BadRequest",
    "ConfigurationError",
    "Dispatcher",
    "DispatcherConfig",
    "DuplicateRouteError",
    "ErrorKind",
    "Headers",
    "Method",
    "Parameters",
    "Request",
    "Response",
    "RestApp",
    "RestError",
    "RestResponse",
    "RoleCheck",
    "Route",
    "RouteConfig",
    "RouteTable",
    "rest",
    "split_path",
]

# Public name -> defining module, imported on first access
_LAZY_IMPORTS: dict[str, str] = {
    "ANY_METHOD": "restroute.http.method",
    "CORS_HEADERS": "restroute.config",
    "PUBLIC": "restroute.auth",
    "AuthorizationCheck": "restroute.auth",
    "BadRequest": "restroute.errors",
    "ConfigurationError": "restroute.errors",
    "Dispatcher": "restroute.dispatcher",
    "DispatcherConfig": "restroute.config",
    "DuplicateRouteError": "restroute.errors",
    "ErrorKind": "restroute.errors",
    "Headers": "restroute.http.headers",
    "Method": "restroute.http.method",
    "Parameters": "restroute.http.params",
    "Request": "restroute.http.request",
    "Response": "restroute.http.response",
    "RestApp": "restroute.server.app",
    "RestError": "restroute.errors",
    "RestResponse": "restroute.http.response",
    "RoleCheck": "restroute.auth",
    "Route": "restroute.routing.route",
    "RouteConfig": "restroute.routing.route",
    "RouteTable": "restroute.routing.router",
    "rest": "restroute.services",
    "split_path": "restroute.routing.router",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import restroute`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
