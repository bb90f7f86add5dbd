"""Authorization checks consulted before a protected service runs.

The dispatcher only knows the call contract: given the bound request and
the route's required role string, answer whether the request may proceed.
Routes with an empty role are public and never consult the check.

Usage::

    def roles_of(request):
        return (request.get_header("X-Roles") or "").split(",")

    dispatcher = Dispatcher(RoleCheck(roles_of))

    @dispatcher.route("/admin/users", authorized="admin")
    def list_users(request):
        ...
"""

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from restroute.http.request import Request

_log = logging.getLogger("restroute.auth")


class AuthorizationCheck(Protocol):
    """Decides whether *request* may reach a route requiring *required_role*."""

    def __call__(self, request: Request, required_role: str) -> bool: ...


def PUBLIC(request: Request, required_role: str) -> bool:  # noqa: N802, ARG001
    """Authorization check that admits every request."""
    return True


def split_roles(required_role: str) -> frozenset[str]:
    """Split a comma-separated role list (``"admin, editor"``)."""
    return frozenset(role.strip() for role in required_role.split(",") if role.strip())


class RoleCheck:
    """Admit requests holding at least one of the route's roles.

    *roles_of* extracts the caller's roles from the bound request (from a
    session, a token header, ...). The route's required role string may
    list several comma-separated roles; any one of them suffices.
    """

    __slots__ = ("_roles_of",)

    def __init__(self, roles_of: Callable[[Request], Iterable[str]]) -> None:
        self._roles_of = roles_of

    def __call__(self, request: Request, required_role: str) -> bool:
        required = split_roles(required_role)
        granted = {role.strip() for role in self._roles_of(request)}
        if required.isdisjoint(granted):
            _log.debug(
                "Denied %s %s: requires one of %s",
                request.method,
                request.path,
                ", ".join(sorted(required)),
            )
            return False
        return True
