"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response; the original is never
modified.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set status
    and headers. Each call returns a new ``Response``. Header names keep
    their spelling; lookups through ``header()`` ignore case.
    """

    body: str | bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    charset: str = "utf-8"

    @classmethod
    def empty(cls, status: int) -> Response:
        """A bodiless ``text/plain`` response with the given status."""
        return cls(body="", status=status, headers=(("Content-Type", "text/plain"),))

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items()) if isinstance(headers, Mapping) else tuple(headers)
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response whose Content-Type replaces any existing one."""
        kept = tuple((k, v) for k, v in self.headers if k.lower() != "content-type")
        return replace(self, headers=(*kept, ("Content-Type", content_type)))

    # -- Header access --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the last value set for *name* (case-insensitive)."""
        name_lower = name.lower()
        for key, value in reversed(self.headers):
            if key.lower() == name_lower:
                return value
        return default

    @property
    def header_names(self) -> list[str]:
        """Distinct header names in the order they were first set."""
        seen: set[str] = set()
        names: list[str] = []
        for key, _ in self.headers:
            if key.lower() not in seen:
                seen.add(key.lower())
                names.append(key)
        return names

    @property
    def content_type(self) -> str | None:
        return self.header("Content-Type")

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode(self.charset)
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode(self.charset)
        return self.body


@dataclass(frozen=True, slots=True)
class RestResponse:
    """A service result whose body is an object, serialized later.

    The dispatcher hands it to its ``ResponseSerializer`` to become a
    ``Response`` (JSON by default).
    """

    body: Any = None
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()


def header_pairs(headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Return *headers* as a list of ``(name, value)`` string pairs.

    Raises ``TypeError`` for anything else, such as a plain mapping or a
    ``None`` value.
    """
    pairs: list[tuple[str, str]] = []
    for pair in headers:
        if not (
            isinstance(pair, tuple)
            and len(pair) == 2
            and isinstance(pair[0], str)
            and isinstance(pair[1], str)
        ):
            msg = f"Malformed header, expected a (name, value) pair of strings: {pair!r}"
            raise TypeError(msg)
        pairs.append(pair)
    return pairs


def merge_headers(
    defaults: Iterable[tuple[str, str]],
    response: Response,
) -> Response:
    """Return *response* with *defaults* merged underneath its own headers.

    Defaults come first, in their order. A header the response sets
    itself (compared case-insensitively) replaces the default at the
    default's position; headers only the response sets follow in their
    own order. Status, body and charset are untouched.

    Raises ``TypeError`` if either side holds a malformed header.
    """
    response_headers = header_pairs(response.headers)
    own: dict[str, list[tuple[str, str]]] = {}
    for name, value in response_headers:
        own.setdefault(name.lower(), []).append((name, value))

    merged: list[tuple[str, str]] = []
    emitted: set[str] = set()
    for name, value in header_pairs(defaults):
        key = name.lower()
        if key in emitted:
            continue
        emitted.add(key)
        merged.extend(own.get(key, [(name, value)]))

    for name, value in response_headers:
        if name.lower() not in emitted:
            merged.append((name, value))

    return replace(response, headers=tuple(merged))
