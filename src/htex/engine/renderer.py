"""Renderer: walk a parsed ``HtexFile`` against one request.

Layouts render outside-in.  When a file has a layout, the layout is rendered
with a *continuation* that renders the file itself; the layout's
``<!content>`` calls that continuation, so page markup lands exactly once,
inside the layout markup, however deep the chain goes::

    layout.htex:  <html><!content></html>
    page.htex:    <!layout layout.htex><p>Hi</p>
    output:       <html><p>Hi</p></html>

Output is written to a ``Sink`` as it is produced; nothing is buffered, so
bytes already written stay written if a later step fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from typing import Protocol

from htex.engine.context import RenderContext
from htex.engine.elements import Element, ElemKind, HtexFile
from htex.engine.paths import clean_url_path, resolve_reference

logger = logging.getLogger("htex.engine")

# Renders a page's own content into a sink
type Continuation = Callable[[Sink], None]

type MarkdownTransform = Callable[[bytes], bytes]


class Sink(Protocol):
    """Append-only byte destination."""

    def write(self, data: bytes, /) -> object: ...


# Quotes become numeric entities: &#39; and &#34;
_HTML_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", "'": "&#39;", '"': "&#34;"})


def _encode(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


class Renderer:
    """Renders parsed files; safe to share, holds no per-request state.

    Args:
        root: Content root for ``/``-prefixed include paths.
        markdown: ``(bytes) -> bytes`` transform for ``<!include-markdown>``.
            Defaults to patitas via ``htex.markdown``, created on first use.
    """

    def __init__(self, root: str | Path, *, markdown: MarkdownTransform | None = None) -> None:
        self.root = Path(root)
        self._markdown = markdown

    @property
    def markdown(self) -> MarkdownTransform:
        if self._markdown is None:
            from htex.markdown import MarkdownRenderer

            self._markdown = MarkdownRenderer()
        return self._markdown

    def render(
        self,
        file: HtexFile,
        context: RenderContext,
        sink: Sink,
        content: Continuation | None = None,
    ) -> None:
        """Render *file* for *context* into *sink*.

        *content* fills the file's ``<!content>`` slot; without it the slot
        renders as nothing.  Variables set anywhere in the layout chain are
        visible to the rest of the render.
        """
        self._render(file, context, sink, content, {})

    def render_bytes(self, file: HtexFile, context: RenderContext) -> bytes:
        """Render into memory and return the output."""
        buffer = BytesIO()
        self.render(file, context, buffer)
        return buffer.getvalue()

    def _render(
        self,
        file: HtexFile,
        context: RenderContext,
        sink: Sink,
        content: Continuation | None,
        variables: dict[str, str],
    ) -> None:
        if file.layout is not None:
            page = file.without_layout()

            def render_page(inner: Sink) -> None:
                self._render(page, context, inner, content, variables)

            self._render(file.layout, context, sink, render_page, variables)
            return

        skipping = False
        for element in file.elements:
            if element.kind is ElemKind.METHOD:
                skipping = not _method_matches(element, context)
                continue
            if skipping:
                continue
            self._write_element(element, file, context, sink, content, variables)

    def _write_element(
        self,
        element: Element,
        file: HtexFile,
        context: RenderContext,
        sink: Sink,
        content: Continuation | None,
        variables: dict[str, str],
    ) -> None:
        match element.kind:
            case ElemKind.TEXT:
                sink.write(_encode(element.text))
            case ElemKind.CONTENT:
                # A layout requested directly has nothing to wrap
                if content is not None:
                    content(sink)
            case ElemKind.GET:
                value = variables.get(element.text)
                if value is not None:
                    sink.write(_encode(value))
            case ElemKind.SET:
                if element.values is not None:
                    variables[element.text] = element.values[element.text][0]
                else:
                    variables.pop(element.text, None)
            case ElemKind.URL:
                sink.write(_encode(clean_url_path(context.path)))
            case ElemKind.DATA:
                value = context.form.get(element.text)
                if value is not None:
                    sink.write(_encode(value))
            case ElemKind.QUERY:
                if element.text:
                    value = context.query.get(element.text)
                    if value is not None:
                        sink.write(_encode(value))
                else:
                    sink.write(context.query.raw)
            case _ if element.kind.is_include:
                self._include(element, file, sink)

    def _include(self, element: Element, file: HtexFile, sink: Sink) -> None:
        target = resolve_reference(self.root, file.path, element.text)
        try:
            data = target.read_bytes()
        except OSError as exc:
            logger.warning("cannot include %s from %s: %s", target, file.path, exc.strerror or exc)
            return

        if element.kind is ElemKind.INCLUDE_ESCAPED:
            text = data.decode("utf-8", errors="surrogateescape")
            data = _encode(text.translate(_HTML_ESCAPES))
        elif element.kind is ElemKind.INCLUDE_MARKDOWN:
            data = self.markdown(data)
        sink.write(data)


def _method_matches(element: Element, context: RenderContext) -> bool:
    """Whether a ``<!method>`` element lets output through for *context*."""
    if element.text == "any":
        return True
    if element.text != context.method.lower():
        return False
    return element.values is None or _match_query(element.values, context)


def _match_query(constraints: dict[str, tuple[str, ...]], context: RenderContext) -> bool:
    for key, values in constraints.items():
        if key not in context.query:
            return False
        if values and values[0] and context.query[key] != values[0]:
            return False
    return True
