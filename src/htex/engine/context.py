"""The request view a render sees.

Templates read four things from a request: its method, its URL path, the
query string, and posted form fields.  ``RenderContext`` freezes exactly
those so the renderer never touches ASGI or the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from htex.errors import HTTPError
from htex.http.forms import FormData, is_form_content
from htex.http.query import QueryParams
from htex.http.request import Request

# Methods whose body is read as a form
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Read-only request data for one render.

    Attributes:
        method: HTTP method, as sent.
        path: URL path, not yet cleaned.
        query: Parsed query string; ``query.raw`` keeps the original bytes.
        form: Posted form fields merged ahead of query values.
    """

    method: str = "GET"
    path: str = "/"
    query: QueryParams = field(default_factory=QueryParams)
    form: FormData = field(default_factory=FormData)

    @classmethod
    def for_get(cls, path: str, query_string: bytes | str = b"") -> RenderContext:
        """A plain ``GET`` of *path*, as the static generator issues."""
        query = QueryParams(query_string)
        return cls(method="GET", path=path, query=query, form=FormData.combine(query))

    @classmethod
    async def from_request(cls, request: Request) -> RenderContext:
        """Build the context for *request*, reading its form body if any."""
        sources: list[QueryParams | FormData] = []
        if request.method.upper() in BODY_METHODS and is_form_content(request.content_type):
            try:
                sources.append(await request.form())
            except ValueError as exc:
                raise HTTPError(400, f"Malformed form body: {exc}") from exc
        sources.append(request.query)
        return cls(
            method=request.method,
            path=request.path,
            query=request.query,
            form=FormData.combine(*sources),
        )
