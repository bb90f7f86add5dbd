"""Shared type aliases used across restroute modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from restroute.http.request import Request

# Service handler: receives the bound request, returns a response value
Handler: TypeAlias = Callable[["Request"], Any]
