"""The incoming HTTP request, as far as htex needs it.

A page reads the method, the path, the query string and, for body
methods, the posted form.  The access log adds the client address.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from htex._internal.asgi import Receive, Scope
from htex.http.headers import Headers
from htex.http.query import QueryParams

if TYPE_CHECKING:
    from htex.http.forms import FormData


@dataclass(frozen=True, slots=True)
class Request:
    """Frozen request metadata plus a lazily read, cached body."""

    method: str
    path: str
    headers: Headers
    query: QueryParams
    client: tuple[str, int] | None = None

    # ASGI receive channel; the body can be drained only once
    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Request path plus query string, as received."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @property
    def remote_addr(self) -> str:
        """Client address as ``host:port``, or ``-`` when unknown."""
        if self.client is None:
            return "-"
        host, port = self.client
        return f"{host}:{port}"

    async def body(self) -> bytes:
        """The full request body, read on first call."""
        if "body" not in self._cache:
            chunks: list[bytes] = []
            more = self._receive is not None
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._cache["body"] = b"".join(chunks)
        return self._cache["body"]

    async def form(self) -> FormData:
        """The body parsed as a form (URL-encoded or multipart).

        Raises:
            ValueError: Content-Type is not a form encoding, or the body is
                malformed.
        """
        if "form" not in self._cache:
            from htex.http.forms import parse_form_data

            ct = self.content_type or "application/x-www-form-urlencoded"
            self._cache["form"] = await parse_form_data(await self.body(), ct)
        return self._cache["form"]

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            client=tuple(client) if client else None,
            _receive=receive,
        )
