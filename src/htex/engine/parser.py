"""Parser: tokens to ``HtexFile``.

Each tag name maps to a small handler that reads the tag's arguments and
returns the element it produces, or ``None`` when the tag has no element of
its own (``<!layout>``, tolerated bare forms).  Whatever arguments a handler
leaves unread are dropped up to the tag's closing ``>``.

Layouts are parsed eagerly and recursively; a file owns its layout's parse
tree outright, so two pages sharing a layout each get their own copy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from htex.engine.elements import Element, ElemKind, HtexFile
from htex.engine.paths import resolve_reference
from htex.engine.tokenizer import Token, TokenKind, tokenize
from htex.errors import LayoutParseFailure, SourceNotFound

logger = logging.getLogger("htex.engine")


class _TokenStream:
    """Token iterator with one-token pushback and tag-argument helpers."""

    __slots__ = ("_pending", "_tokens")

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._pending: Token | None = None

    def __iter__(self) -> _TokenStream:
        return self

    def __next__(self) -> Token:
        if self._pending is not None:
            token, self._pending = self._pending, None
            return token
        return next(self._tokens)

    def push_back(self, token: Token) -> None:
        self._pending = token

    def arg(self) -> str | None:
        """Next argument of the current tag, or None at its end."""
        token = next(self, None)
        if token is None:
            return None
        if token.kind is TokenKind.TAG_ARG:
            return token.text
        self.push_back(token)
        return None

    def args(self) -> list[str]:
        """All remaining arguments of the current tag."""
        words: list[str] = []
        while (word := self.arg()) is not None:
            words.append(word)
        return words

    def skip_tag(self) -> None:
        """Drop leftover arguments and the closing ``>``."""
        for token in self:
            if token.kind is TokenKind.TAG_CLOSE:
                return
            if token.kind is not TokenKind.TAG_ARG:
                self.push_back(token)
                return


class Parser:
    """Builds ``HtexFile`` trees from sources under one content root.

    Args:
        root: Content root; ``/``-prefixed references resolve from here.
        keep_comments: Keep ``<!-- ... -->`` as literal text.
        chunk_size: Read size for the tokenizer driver.
    """

    def __init__(self, root: str | Path, *, keep_comments: bool = False, chunk_size: int = 4096) -> None:
        self.root = Path(root)
        self.keep_comments = keep_comments
        self.chunk_size = chunk_size
        self._tags: dict[str, Callable[[_TokenStream, Path, HtexFile, frozenset[Path]], Element | None]] = {
            "<!layout": self._layout,
            "<!content": self._content,
            "<!get": self._get,
            "<!set": self._set,
            "<!url": self._url,
            "<!data": self._data,
            "<!query": self._query,
            "<!method": self._method,
            "<!include-raw": self._include(ElemKind.INCLUDE_RAW),
            "<!include-escaped": self._include(ElemKind.INCLUDE_ESCAPED),
            "<!include-markdown": self._include(ElemKind.INCLUDE_MARKDOWN),
        }

    def parse_file(self, path: str | Path) -> HtexFile:
        """Parse the source at *path*.

        Raises:
            SourceNotFound: The file (or its directory) cannot be opened.
            LayoutParseFailure: A referenced layout cannot be parsed.
        """
        return self._parse_file(Path(path), frozenset())

    def parse_source(self, path: str | Path, stream: BinaryIO) -> HtexFile:
        """Parse an already-open binary stream as if it were read from *path*.

        *path* anchors relative ``<!layout>`` and include references.
        """
        return self._parse_stream(Path(path), stream, frozenset())

    def parse_bytes(self, path: str | Path, source: bytes) -> HtexFile:
        """Parse in-memory *source* as if it were read from *path*."""
        return self.parse_source(path, BytesIO(source))

    def _parse_file(self, path: Path, seen: frozenset[Path]) -> HtexFile:
        logger.debug(" -> parse file %s", path)
        try:
            stream = path.open("rb")
        except OSError as exc:
            raise SourceNotFound(path, exc.strerror or str(exc)) from exc
        with stream:
            return self._parse_stream(path, stream, seen)

    def _parse_stream(self, path: Path, stream: BinaryIO, seen: frozenset[Path]) -> HtexFile:
        seen = seen | {path}
        htex_file = HtexFile(path=path)
        tokens = _TokenStream(tokenize(stream, keep_comments=self.keep_comments, chunk_size=self.chunk_size))

        for token in tokens:
            if token.kind is TokenKind.TEXT:
                if token.data:
                    htex_file.elements.append(Element(ElemKind.TEXT, token.text))
                continue
            if token.kind is not TokenKind.TAG_OPEN:
                # Stray argument or ">" outside a tag
                continue

            name = token.text.lower()
            handler = self._tags.get(name)
            if handler is None:
                logger.warning("invalid htex element %s in %s", token.text, path)
            else:
                element = handler(tokens, path, htex_file, seen)
                if element is not None:
                    htex_file.elements.append(element)
            tokens.skip_tag()

        return htex_file

    # -- Tag handlers --

    def _layout(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> None:
        reference = tokens.arg()
        if reference is None:
            return None
        layout_path = resolve_reference(self.root, path, reference)
        if layout_path in seen:
            raise LayoutParseFailure(path, layout_path, "layout cycle")
        try:
            htex_file.layout = self._parse_file(layout_path, seen)
        except LayoutParseFailure:
            raise
        except SourceNotFound as exc:
            raise LayoutParseFailure(path, layout_path, str(exc)) from exc
        return None

    def _content(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element:
        return Element(ElemKind.CONTENT)

    def _get(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element | None:
        name = tokens.arg()
        if name is None:
            return None
        return Element(ElemKind.GET, name)

    def _set(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element | None:
        name = tokens.arg()
        if name is None:
            return None
        words = tokens.args()
        return Element(ElemKind.SET, name, {name: tuple(words)} if words else None)

    def _url(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element:
        return Element(ElemKind.URL)

    def _data(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element | None:
        name = tokens.arg()
        if name is None:
            return None
        return Element(ElemKind.DATA, name)

    def _query(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element:
        return Element(ElemKind.QUERY, tokens.arg() or "")

    def _method(self, tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element:
        name = tokens.arg()
        if name is None:
            # Matches no request method: output stays off until the next <!method>
            return Element(ElemKind.METHOD, "")
        constraints: dict[str, tuple[str, ...]] = {}
        for word in tokens.args():
            key, _, value = word.partition("=")
            constraints[key] = (*constraints.get(key, ()), value)
        return Element(ElemKind.METHOD, name.lower(), constraints or None)

    def _include(
        self, kind: ElemKind
    ) -> Callable[[_TokenStream, Path, HtexFile, frozenset[Path]], Element | None]:
        def handler(tokens: _TokenStream, path: Path, htex_file: HtexFile, seen: frozenset[Path]) -> Element | None:
            reference = tokens.arg()
            if reference is None:
                return None
            return Element(kind, reference)

        return handler
