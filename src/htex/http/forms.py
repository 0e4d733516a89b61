"""Form body parsing — URL-encoded and multipart.

``<!data name>`` reads from a ``FormData``.  URL-encoded bodies use stdlib
``urllib.parse``; ``multipart/form-data`` uses ``python-multipart``.  Only
text fields are collected; file parts are skipped because templates have no
way to consume them.
"""

from __future__ import annotations

from typing import Any

from htex.http.multidict import MultiDict

FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


class FormData(MultiDict):
    """Immutable parsed form fields.

    Usage::

        form = await request.form()
        username = form.get("username")
    """

    __slots__ = ()

    @classmethod
    def combine(cls, *sources: MultiDict) -> FormData:
        """Merge several multi-maps, earlier sources' values first.

        A posted body combined with the URL query gives the same lookup
        order as a classic CGI form: body values win, query values follow.
        """
        merged: dict[str, list[str]] = {}
        for source in sources:
            for key, values in source.lists():
                merged.setdefault(key, []).extend(values)
        return cls(merged)


def media_type(content_type: str) -> str:
    """Return the lowercased media type without parameters."""
    return content_type.lower().split(";")[0].strip()


async def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into FormData.

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Returns:
        Parsed FormData instance.

    Raises:
        ValueError: If the content type is not a form encoding, or a
            multipart body has no boundary.
    """
    ct = media_type(content_type)

    if ct == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    from urllib.parse import parse_qs

    return FormData(parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True))


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data using python-multipart."""
    from multipart.multipart import MultipartParser, parse_options_header

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}

    # Per-part state
    current_data = bytearray()
    current_field: str | None = None
    is_file = False
    pending_header = ""

    def on_part_begin() -> None:
        nonlocal current_data, current_field, is_file
        current_data = bytearray()
        current_field = None
        is_file = False

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        current_data.extend(chunk[start:end])

    def on_part_end() -> None:
        if current_field is None or is_file:
            return
        data.setdefault(current_field, []).append(current_data.decode("utf-8", errors="replace"))

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header = chunk[start:end].decode("latin-1").lower()

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        nonlocal current_field, is_file
        if pending_header != "content-disposition":
            return
        _, params = parse_options_header(chunk[start:end])
        name = params.get(b"name")
        if name is not None:
            current_field = name.decode("utf-8")
        is_file = b"filename" in params

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data)


def is_form_content(content_type: str | None) -> bool:
    """True if *content_type* names a form encoding htex can parse."""
    return content_type is not None and media_type(content_type) in FORM_CONTENT_TYPES
