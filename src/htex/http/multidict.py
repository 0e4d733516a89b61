"""Read-only multi-valued string mappings.

``QueryParams`` and ``FormData`` share the same shape: every key maps to a
list of values and ``__getitem__`` returns the first one.  Templates only
ever read first values; the full lists are kept so a posted body and the
query string can be merged in order.
"""

from collections.abc import Iterator, Mapping


class MultiDict(Mapping[str, str]):
    """Immutable ``key -> [values]`` mapping backed by a plain dict.

    Insertion order of keys and of values per key is preserved.
    """

    __slots__ = ("_data",)

    _data: dict[str, list[str]]

    def __init__(self, data: Mapping[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", {k: list(v) for k, v in (data or {}).items()})

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self._data[k]!r}" for k in self)
        return f"{type(self).__name__}({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def lists(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate ``(key, values)`` pairs."""
        for key, values in self._data.items():
            yield key, list(values)
