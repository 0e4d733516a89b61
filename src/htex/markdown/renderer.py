"""Markdown transform for ``<!include-markdown>``, wrapping patitas.

The renderer consumes the transform as ``(bytes) -> bytes``; this module
adapts patitas' ``str -> str`` interface to that shape.  Fenced code is
emitted without syntax highlighting.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from htex.markdown.errors import MarkdownNotInstalledError

if TYPE_CHECKING:
    from patitas import Markdown


class MarkdownRenderer:
    """Render Markdown to HTML via patitas.

    Args:
        plugins: Patitas plugins to enable (default: all).
    """

    __slots__ = ("_md",)

    def __init__(self, *, plugins: Sequence[str] | None = None) -> None:
        self._md: Markdown = _get_markdown(plugins)

    def render(self, source: str) -> str:
        """Render Markdown source to an HTML string."""
        if not source:
            return ""
        return self._md(source)

    def __call__(self, source: bytes) -> bytes:
        """Render UTF-8 Markdown bytes to UTF-8 HTML bytes."""
        return self.render(source.decode("utf-8", errors="replace")).encode("utf-8")


def _get_markdown(plugins: Sequence[str] | None) -> Markdown:
    try:
        from patitas import Markdown
    except ImportError:
        msg = "<!include-markdown> requires 'patitas'. Install with: pip install patitas"
        raise MarkdownNotInstalledError(msg) from None

    return Markdown(plugins=list(plugins or ["all"]), highlight=False)
