"""Resolve ``"module:attribute"`` strings to a Dispatcher.

The attribute may be a ``Dispatcher``, a ``RestApp`` wrapping one, or a
zero-argument factory returning either.
"""

import importlib
from typing import Any

from restroute.dispatcher import Dispatcher
from restroute.server.app import RestApp

DEFAULT_ATTRIBUTE = "dispatcher"


def _load(import_string: str) -> Any:
    module_name, _, attribute = import_string.partition(":")
    return getattr(importlib.import_module(module_name), attribute or DEFAULT_ATTRIBUTE)


def resolve_dispatcher(import_string: str) -> Dispatcher:
    """Return the Dispatcher named by *import_string*.

    ``"myapi"`` is shorthand for ``"myapi:dispatcher"``.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The module has no such attribute.
        TypeError: The attribute is not (and does not produce) a
            Dispatcher or RestApp, or the factory failed.
    """
    target = _load(import_string)

    if callable(target) and not isinstance(target, (Dispatcher, RestApp)):
        try:
            target = target()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    match target:
        case Dispatcher():
            return target
        case RestApp():
            return target.dispatcher
        case _:
            msg = f"{import_string!r} resolved to {type(target).__name__}, not a restroute Dispatcher"
            raise TypeError(msg)
