"""Parameter bag — Ordered, multi-valued request parameters for Solr."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


def _as_values(value: Any) -> list[str]:
    if isinstance(value, list | tuple):
        return [str(v) for v in value]
    return [str(value)]


class ParamBag:
    """Mutable mapping of parameter names to ordered lists of values.

    Solr accepts repeated parameters (``fq``, ``mlt.fl``, ...), so every
    key holds a list.  Insertion order of keys and values is preserved.

    Example:
        >>> params = ParamBag({"rows": 10})
        >>> params.add("fq", "format:Book")
        >>> params.set("q", 'id:"123"')
        >>> params.to_query_params()
        [('rows', '10'), ('fq', 'format:Book'), ('q', 'id:"123"')]
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._params: dict[str, list[str]] = {}
        if initial:
            for key, value in initial.items():
                self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        """Replace all values of *key*."""
        self._params[key] = _as_values(value)

    def add(self, key: str, value: Any) -> None:
        """Append value(s) to *key*."""
        self._params.setdefault(key, []).extend(_as_values(value))

    def get(self, key: str) -> list[str] | None:
        """Return the values of *key*, or ``None`` when it is absent."""
        values = self._params.get(key)
        return list(values) if values is not None else None

    def merge(self, other: ParamBag) -> None:
        """Append every value of *other* to this bag."""
        for key, values in other.items():
            self.add(key, values)

    def items(self) -> Iterable[tuple[str, list[str]]]:
        return [(key, list(values)) for key, values in self._params.items()]

    def to_query_params(self) -> list[tuple[str, str]]:
        """Flatten into ``(key, value)`` pairs suitable for an HTTP query string."""
        return [(key, value) for key, values in self._params.items() for value in values]

    def __contains__(self, key: object) -> bool:
        return key in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParamBag):
            return NotImplemented
        return self._params == other._params

    def __repr__(self) -> str:
        return f"ParamBag({self._params!r})"
