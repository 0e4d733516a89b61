"""Parsed template model.

A parsed ``.htex`` file is an ordered list of ``Element`` values plus an
optional layout file that wraps it.  Everything here is plain data: the
parser builds it once per request and the renderer only reads it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path


class ElemKind(Enum):
    """What an element does when rendered."""

    TEXT = "text"
    CONTENT = "content"
    GET = "get"
    SET = "set"
    URL = "url"
    METHOD = "method"
    DATA = "data"
    QUERY = "query"
    INCLUDE_RAW = "include-raw"
    INCLUDE_ESCAPED = "include-escaped"
    INCLUDE_MARKDOWN = "include-markdown"

    @property
    def is_include(self) -> bool:
        return self in _INCLUDES


_INCLUDES = frozenset({ElemKind.INCLUDE_RAW, ElemKind.INCLUDE_ESCAPED, ElemKind.INCLUDE_MARKDOWN})


@dataclass(frozen=True, slots=True)
class Element:
    """One typed unit of a template.

    Attributes:
        kind: The element's role.
        text: Literal text for ``TEXT``; the variable, field or key name for
            ``GET``/``SET``/``DATA``/``QUERY``; the lowercased method name
            for ``METHOD``; the referenced path for the includes.
        values: ``SET`` keeps the assigned words under its own name
            (``None`` means "clear").  ``METHOD`` keeps its query
            constraints, an empty string meaning "key must be present".
    """

    kind: ElemKind
    text: str = ""
    values: dict[str, tuple[str, ...]] | None = None


@dataclass(slots=True)
class HtexFile:
    """A parsed source file and the layout chain above it."""

    path: Path
    elements: list[Element] = field(default_factory=list)
    layout: HtexFile | None = None

    @property
    def kinds(self) -> list[ElemKind]:
        """Element kinds in document order."""
        return [element.kind for element in self.elements]

    def without_layout(self) -> HtexFile:
        """Shallow copy with the layout link cleared."""
        return replace(self, layout=None)

    def chain(self) -> Iterator[HtexFile]:
        """Yield this file, then each enclosing layout outward."""
        current: HtexFile | None = self
        while current is not None:
            yield current
            current = current.layout
