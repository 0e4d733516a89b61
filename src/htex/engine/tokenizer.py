"""Incremental tokenizer for ``.htex`` sources.

The tokenizer splits raw bytes into four kinds of tokens:

- ``TEXT``: a literal run, including ``<!doctype ...>`` declarations and,
  when comments are kept, whole ``<!-- ... -->`` comments.
- ``TAG_OPEN``: the name fragment of a tag, e.g. ``<!method``.
- ``TAG_ARG``: one whitespace-delimited argument word inside a tag.
- ``TAG_CLOSE``: the ``>`` ending a tag, emitted as its own token.

A tag starts at ``<!`` followed by a name byte; ``<!>`` or ``<!`` followed
by whitespace is plain text.

``Tokenizer.next`` is a split step over a buffer: it reports how many bytes
it consumed, the token it produced (if any), and whether input is finished.
When it cannot decide at the end of a partial buffer it consumes nothing,
and the driver reads more data before calling again.  ``tokenize`` is that
driver over any binary stream.

Scanner state lives on the instance, so one ``Tokenizer`` serves exactly
one source.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import BinaryIO

_WHITESPACE = b" \t\r\n"
_DOCTYPE = b"doctype"


class TokenKind(Enum):
    TEXT = "text"
    TAG_OPEN = "tag-open"
    TAG_ARG = "tag-arg"
    TAG_CLOSE = "tag-close"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    data: bytes

    @property
    def text(self) -> str:
        """Token bytes as str; undecodable bytes survive a round trip."""
        return self.data.decode("utf-8", errors="surrogateescape")


# (consumed, token, done)
type Step = tuple[int, Token | None, bool]

NEED_MORE: Step = (0, None, False)


class Tokenizer:
    """Stateful split function for one ``.htex`` source.

    Args:
        keep_comments: Fold ``<!-- ... -->`` into the surrounding text
            instead of discarding it.
    """

    __slots__ = ("_closing_tag", "_inside_comment", "_inside_tag", "_resume", "keep_comments")

    def __init__(self, *, keep_comments: bool = False) -> None:
        self.keep_comments = keep_comments
        self._inside_tag = False
        self._inside_comment = False
        self._closing_tag = False
        # Text already scanned in a buffer that came back with NEED_MORE
        self._resume = 0

    def next(self, data: bytes, at_eof: bool) -> Step:
        """Scan *data* from its start and return the next step.

        After ``NEED_MORE`` the next call must pass the same bytes with more
        appended, as ``tokenize`` does; scanning then resumes where it stopped.
        """
        if self._closing_tag:
            self._closing_tag = False
            return 1, Token(TokenKind.TAG_CLOSE, data[:1]), False

        if self._inside_comment:
            return self._skip_comment(data, at_eof)

        if self._inside_tag:
            return self._tag_arg(data, at_eof)

        return self._text(data, at_eof)

    def _text(self, data: bytes, at_eof: bool) -> Step:
        size = len(data)
        i = self._resume
        while True:
            i = data.find(b"<!", i)
            if i < 0:
                i = size - 1 if data.endswith(b"<") else size
                break
            if i + 2 >= size:
                break

            third = data[i + 2 : i + 3]
            if third in _WHITESPACE or third == b">":
                # No tag name: <!> and "<! x" are literal text
                i += 2
                continue

            ahead = data[i + 2 : i + 9]
            if ahead.lower() == _DOCTYPE:
                i += 9
                continue
            if not at_eof and len(ahead) < len(_DOCTYPE) and _DOCTYPE.startswith(ahead.lower()):
                # Could still turn into <!doctype once more data arrives
                return self._need_more(i)
            if ahead == b"-" and not at_eof:
                return self._need_more(i)

            if ahead[:2] == b"--" and self.keep_comments:
                end = data.find(b"-->", i + 2)
                if end >= 0:
                    i = end + 3
                    continue
                if not at_eof:
                    return self._need_more(i)
                break

            self._resume = 0
            if ahead[:2] == b"--":
                self._inside_comment = True
                if i > 0:
                    return i, Token(TokenKind.TEXT, data[:i]), False
                return self._skip_comment(data, at_eof)
            if i > 0:
                return i, Token(TokenKind.TEXT, data[:i]), False
            return self._open_tag(data, at_eof)

        if not at_eof:
            return self._need_more(i)
        self._resume = 0
        if not data:
            return 0, None, True
        return size, Token(TokenKind.TEXT, data), True

    def _need_more(self, scanned: int) -> Step:
        self._resume = scanned
        return NEED_MORE

    def _tag_arg(self, data: bytes, at_eof: bool) -> Step:
        size = len(data)
        for i in range(size):
            byte = data[i : i + 1]
            if byte in _WHITESPACE:
                j = i
                while i < size and data[i : i + 1] in _WHITESPACE:
                    i += 1
                if j == 0:
                    return i, None, False
                return i, Token(TokenKind.TAG_ARG, data[:j]), False
            if byte == b">":
                self._inside_tag = False
                if i == 0:
                    return 1, Token(TokenKind.TAG_CLOSE, b">"), False
                self._closing_tag = True
                return i, Token(TokenKind.TAG_ARG, data[:i]), False

        if not at_eof:
            return NEED_MORE
        if not data:
            return 0, None, True
        return size, Token(TokenKind.TAG_ARG, data), True

    def _skip_comment(self, data: bytes, at_eof: bool) -> Step:
        # ``<!-->`` is a complete empty comment, so search from the ``<!``
        end = data.find(b"-->", 2)
        if end < 0:
            if not at_eof:
                return NEED_MORE
            # Unterminated: drop the rest of the input
            self._inside_comment = False
            return len(data), None, True
        self._inside_comment = False
        return end + 3, None, False

    def _open_tag(self, data: bytes, at_eof: bool) -> Step:
        close = data.find(b">", 2)
        if close < 0:
            if not at_eof:
                return NEED_MORE
            # Never closed: the rest of the input is literal text
            return len(data), Token(TokenKind.TEXT, data), True
        for j in range(2, close):
            if data[j : j + 1] in _WHITESPACE:
                self._inside_tag = True
                return j + 1, Token(TokenKind.TAG_OPEN, data[:j]), False
        self._closing_tag = True
        return close, Token(TokenKind.TAG_OPEN, data[:close]), False


def tokenize(
    stream: BinaryIO,
    *,
    keep_comments: bool = False,
    chunk_size: int = 4096,
) -> Iterator[Token]:
    """Yield tokens from a binary stream, reading *chunk_size* bytes at a time."""
    tokenizer = Tokenizer(keep_comments=keep_comments)
    buffer = b""
    at_eof = False
    while True:
        if not buffer and not at_eof:
            chunk = stream.read(chunk_size)
            if chunk:
                buffer += chunk
            else:
                at_eof = True
            continue

        consumed, token, done = tokenizer.next(buffer, at_eof)
        if token is not None:
            yield token
        if done:
            return
        if consumed:
            buffer = buffer[consumed:]
            continue

        if token is None:
            # Need more data to decide; reads grow with the buffer so a long
            # text run is copied a logarithmic number of times
            chunk = stream.read(max(chunk_size, len(buffer)))
            if chunk:
                buffer += chunk
            else:
                at_eof = True


def tokenize_bytes(source: bytes, *, keep_comments: bool = False) -> list[Token]:
    """Tokenize an in-memory source."""
    return list(tokenize(BytesIO(source), keep_comments=keep_comments))
