"""htex exception hierarchy.

Shared across the parser, renderer, resolver, and ASGI handler so every
module raises and catches the same types.

Fatal template failures (``SourceNotFound``, ``LayoutParseFailure``) abort
the current render and surface as a 500 at the HTTP boundary.  Invalid
tags and unreadable include targets are logged diagnostics, not errors:
the element is dropped and rendering continues.
"""

from dataclasses import dataclass
from pathlib import Path


class HtexError(Exception):
    """Base for all htex-specific errors."""


class ConfigurationError(HtexError):
    """Raised when the server or generator configuration is invalid.

    Typically raised before serving starts, e.g. for a missing content root.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(HtexError):
    """An error that maps directly to an HTTP status code.

    Raised by the resolver or middleware. The ASGI handler catches these
    and turns them into an error page with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no file answers the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class TemplateError(HtexError):
    """Base for failures while parsing an ``.htex`` tree.

    Attributes:
        path: The template file being processed when the error occurred.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)


class SourceNotFound(TemplateError):
    """A template source could not be opened."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        message = f"cannot open {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class LayoutParseFailure(SourceNotFound):
    """A ``<!layout>`` target referenced by *path* could not be parsed.

    Attributes:
        layout_path: The layout file that failed.
    """

    def __init__(self, path: str | Path, layout_path: str | Path, reason: str = "") -> None:
        self.layout_path = Path(layout_path)
        message = f"cannot parse layout {layout_path} referenced by {path}"
        if reason:
            message = f"{message}: {reason}"
        TemplateError.__init__(self, path, message)
