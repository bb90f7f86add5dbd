"""Service discovery: ``@rest`` marks functions and methods as services.

The decorator only attaches a ``RouteConfig``; nothing is registered until
the marked object is handed to ``Dispatcher.register_services()``::

    class PersonService:
        @rest("/person/{id}")
        def get_person(self, request):
            return {"id": request.get_path_parameter("id")}

        @rest("/person", method=Method.POST, authorized="admin")
        def create_person(self, request):
            ...

    dispatcher.register_services(PersonService())
"""

import inspect
from collections.abc import Callable, Iterator
from typing import Any

from restroute._internal.types import Handler
from restroute.http.method import Method
from restroute.routing.route import RouteConfig

_CONFIG_ATTR = "__rest_config__"


def rest(
    path: str,
    *,
    method: Method | str | None = Method.GET,
    authorized: str = "",
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a function or method as a REST service.

    Args:
        path: Absolute path pattern. ``{name}``, ``:name`` and ``@name``
            declare path parameters.
        method: Accepted request method; ``None`` accepts any method.
        authorized: Role required to call the service; empty means public.
    """
    config = RouteConfig(path=path, method=method, authorized=authorized)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, _CONFIG_ATTR, config)
        return func

    return decorator


def service_config(func: Any) -> RouteConfig | None:
    """The ``RouteConfig`` attached by ``@rest``, if any."""
    return getattr(func, _CONFIG_ATTR, None)


def collect_services(obj: Any) -> Iterator[tuple[Handler, RouteConfig]]:
    """Yield ``(handler, config)`` for every ``@rest`` member of *obj*.

    *obj* may be an instance (bound methods are yielded), a class, or a
    module. Members are visited in definition order.
    """
    namespace: dict[str, Any] = {}
    if inspect.ismodule(obj) or inspect.isclass(obj):
        namespace.update(vars(obj))
    else:
        for klass in reversed(type(obj).__mro__):
            namespace.update(vars(klass))

    for name, member in namespace.items():
        if isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        config = service_config(member)
        if config is not None:
            yield getattr(obj, name), config
