"""Markdown-to-HTML transform used by ``<!include-markdown>``.

Thin wrapper around patitas::

    from htex.markdown import MarkdownRenderer

    to_html = MarkdownRenderer()
    to_html(b"# Title")  # b"<h1>Title</h1>..."
"""

from htex.markdown.errors import MarkdownError, MarkdownNotInstalledError
from htex.markdown.renderer import MarkdownRenderer

__all__ = [
    "MarkdownError",
    "MarkdownNotInstalledError",
    "MarkdownRenderer",
]
