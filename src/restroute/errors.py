"""restroute exception hierarchy and error kinds.

Shared across the route table, request accessors, and dispatcher so every
module raises and catches the same types. Failures are classified into an
``ErrorKind`` once, at the dispatcher boundary.
"""

from dataclasses import dataclass
from enum import Enum


class RestError(Exception):
    """Base for all restroute-specific errors."""


class ConfigurationError(RestError):
    """Raised when a service registration is invalid.

    Happens at startup, while routes are being registered. Never raised
    while dispatching a request.
    """


class DuplicateRouteError(ConfigurationError):
    """Raised when a route would occupy an already registered slot."""


@dataclass(frozen=True, slots=True)
class BadRequest(RestError):  # noqa: N818
    """The request data failed validation.

    Raised by handlers (or code they call) and by the request accessors
    for missing or malformed parameters. Anything with a ``BadRequest``
    in its cause chain is answered with 400.
    """

    detail: str = "Bad Request"

    def __str__(self) -> str:
        return self.detail


class ErrorKind(Enum):
    """Outcome kinds the dispatcher can produce instead of a handler response."""

    PATH_NOT_FOUND = 404
    METHOD_NOT_SUPPORTED = 405
    UNAUTHORIZED = 401
    INVALID_PARAMETERS = 400
    INTERNAL_FAILURE = 500

    @property
    def status(self) -> int:
        return self.value


def _cause_chain(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def is_caused_by(exc: BaseException, error_type: type[BaseException]) -> bool:
    """True if *exc* or anything in its cause chain is an *error_type*."""
    return any(isinstance(link, error_type) for link in _cause_chain(exc))


def classify(exc: BaseException) -> ErrorKind:
    """Map a failure raised while serving a request to its ``ErrorKind``."""
    if is_caused_by(exc, BadRequest):
        return ErrorKind.INVALID_PARAMETERS
    return ErrorKind.INTERNAL_FAILURE
