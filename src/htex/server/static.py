"""Static file responses."""

import mimetypes
from pathlib import Path

from htex.http.response import Response

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(path: Path) -> str:
    """Content type from the file extension, with a charset for text."""
    content_type, _ = mimetypes.guess_type(path.name)
    if content_type is None:
        return DEFAULT_CONTENT_TYPE
    if content_type.startswith("text/") or content_type in ("application/javascript", "image/svg+xml"):
        return f"{content_type}; charset=utf-8"
    return content_type


def file_response(path: Path, content_type: str | None = None) -> Response:
    """Read *path* fully into a Response."""
    return Response(
        body=path.read_bytes(),
        content_type=content_type or guess_content_type(path),
    )
