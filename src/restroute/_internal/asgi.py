"""ASGI callables and the slice of the HTTP scope the adapter reads."""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Request line and headers of an ``http`` scope.

    ``path`` is the server-decoded path; routing uses ``request_path``.
    """

    method: str
    path: str
    raw_path: bytes = b""
    query_string: bytes = b""
    headers: tuple[tuple[bytes, bytes], ...] = ()

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_path=scope.get("raw_path") or b"",
            query_string=scope.get("query_string") or b"",
            headers=tuple(scope.get("headers") or ()),
        )

    @property
    def request_path(self) -> str:
        """The still percent-encoded path, without the query string.

        ``raw_path`` keeps ``%2F`` intact, so an encoded slash stays inside
        its segment. Servers that omit it fall back to the decoded path.
        """
        if not self.raw_path:
            return self.path
        return self.raw_path.decode("latin-1").partition("?")[0]

    @property
    def query(self) -> str:
        """The raw query string as text (still percent-encoded)."""
        return self.query_string.decode("latin-1")
