"""HTTP request methods."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class Method(StrEnum):
    """HTTP request methods understood by the dispatcher."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"

    @classmethod
    def parse(cls, value: str | Method) -> Method:
        """Return the method named by *value*, ignoring case.

        Raises ``ValueError`` for names that are not HTTP methods.
        """
        if isinstance(value, Method):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError:
            msg = f"Unknown HTTP method: {value!r}"
            raise ValueError(msg) from None

    @property
    def has_request_body(self) -> bool:
        """True for methods whose requests carry parameters in the body."""
        return self in (Method.POST, Method.PUT, Method.PATCH)


# Route method meaning "accept any request method"
ANY_METHOD: Final = None
