"""Immutable request parameters.

Implements ``Mapping[str, str]`` plus ``get_list`` for repeated names.
Holds the name/value pairs an external parser extracted from the query
string or the request body; the dispatcher only ever reads them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TypeVar
from urllib.parse import parse_qs

from restroute.errors import BadRequest

T = TypeVar("T")

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class Parameters(Mapping[str, str]):
    """Name to values, in arrival order.

    Indexing returns the first value of a name; ``get_list`` returns all
    of them. Blank values are kept, so ``?q=`` is present but blank.
    """

    __slots__ = ("_values",)

    def __init__(self, data: Mapping[str, Iterable[str]] | None = None) -> None:
        values = {} if data is None else {name: tuple(items) for name, items in data.items()}
        object.__setattr__(self, "_values", values)

    @classmethod
    def of(cls, values: Mapping[str, str | None] | Parameters | None) -> Parameters:
        """Build parameters from a plain ``{name: value}`` mapping.

        ``None`` values are dropped. A ``None`` name is a programming error.
        """
        if values is None or isinstance(values, Parameters):
            return values or cls()
        if None in values:
            msg = "Parameter name cannot be None"
            raise TypeError(msg)
        return cls({name: (str(value),) for name, value in values.items() if value is not None})

    @classmethod
    def from_query_string(cls, query_string: str, *, encoding: str = "utf-8") -> Parameters:
        """Parse ``a=1&b=2`` style text. Blank values are kept."""
        return cls(parse_qs(query_string.lstrip("?"), keep_blank_values=True, encoding=encoding))

    def merged(self, other: Parameters) -> Parameters:
        """Return parameters holding our values first, then *other*'s."""
        combined = {name: list(items) for name, items in self._values.items()}
        for name, items in other._values.items():
            combined.setdefault(name, []).extend(items)
        return Parameters(combined)

    # -- Mapping --

    def __getitem__(self, key: str) -> str:
        items = self._values.get(key)
        if not items:
            raise KeyError(key)
        return items[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Parameters({dict(self._values)!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(key, ()))

    # -- Typed access --

    def get_required(self, key: str) -> str:
        """Return the value for *key*.

        Raises ``BadRequest`` when the parameter is missing or blank.
        """
        value = self.get(key)
        if not value:
            raise BadRequest(f"Missing required parameter: {key}")
        return value

    def get_optional(self, key: str, default: str = "") -> str:
        """Return the value for *key*, or *default* when missing or blank."""
        return self.get(key) or default

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Value as int; *default* when missing or not numeric."""
        return self._convert(key, int, default)

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Value as bool: ``true``, ``1``, ``yes`` and ``on`` are true."""
        return self._convert(key, lambda value: value.lower() in _TRUE_VALUES, default)

    def _convert(self, key: str, convert: Callable[[str], T], default: T | None) -> T | None:
        value = self.get(key)
        if value is None:
            return default
        try:
            return convert(value)
        except ValueError:
            return default
