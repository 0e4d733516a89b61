"""Markdown layer error hierarchy."""

from htex.errors import HtexError


class MarkdownError(HtexError):
    """Base for all htex.markdown errors."""


class MarkdownNotInstalledError(MarkdownError):
    """Raised when patitas is not installed."""
