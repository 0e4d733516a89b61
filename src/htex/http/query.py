"""Immutable query string parameters."""

from urllib.parse import parse_qs

from htex.http.multidict import MultiDict


class QueryParams(MultiDict):
    """Parsed query string plus the raw bytes it came from.

    ``<!query key>`` reads the first value of a key; a bare ``<!query>``
    writes ``raw`` verbatim, still percent-encoded.
    """

    __slots__ = ("_raw",)

    _raw: bytes

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, str):
            query_string = query_string.encode("latin-1")
        super().__init__(parse_qs(query_string.decode("latin-1"), keep_blank_values=True))
        object.__setattr__(self, "_raw", query_string)

    @property
    def raw(self) -> bytes:
        """The query string exactly as received, without the leading ``?``."""
        return self._raw
