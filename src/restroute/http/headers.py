"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]`` plus ``get_list`` for repeated names.
Names keep the spelling they arrived with; lookups ignore case.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Request headers, in arrival order.

    Indexing returns the first value sent under a name. Iteration yields
    each distinct name once, spelled as it first arrived.
    """

    __slots__ = ("_index", "_names", "_raw")

    def __init__(self, raw: Iterable[tuple[str, str]] = ()) -> None:
        pairs = tuple((str(name), str(value)) for name, value in raw)
        index: dict[str, list[str]] = {}
        names: dict[str, str] = {}
        for name, value in pairs:
            folded = name.lower()
            index.setdefault(folded, []).append(value)
            names.setdefault(folded, name)
        object.__setattr__(self, "_raw", pairs)
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_names", names)

    @classmethod
    def of(cls, headers: Mapping[str, str] | Iterable[tuple[str, str]] | None) -> Headers:
        """Build headers from a mapping, pairs, or ``None``."""
        match headers:
            case None:
                return cls()
            case Headers():
                return headers
            case Mapping():
                return cls(headers.items())
            case _:
                return cls(headers)

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> Headers:
        """Decode raw ASGI header byte pairs."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    def __getitem__(self, key: str) -> str:
        values = self._index.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Headers({list(self._raw)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self._index.get(key.lower())
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Every value sent under *key*, in arrival order."""
        return list(self._index.get(key.lower(), ()))

    @property
    def raw(self) -> tuple[tuple[str, str], ...]:
        """All header pairs, in arrival order."""
        return self._raw
