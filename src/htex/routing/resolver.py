"""File resolver: map a URL path to a static file or an ``.htex`` page.

Resolution order for a cleaned path ``/p``:

1. ``.htex`` sources are never served as themselves, and no path segment
   may start with ``.`` (except ``.well-known``).
2. ``<root>/p`` as an existing regular file (static).
3. A directory turns ``p`` into ``p/index``.
4. ``<root>/p.htex`` (dynamic).
5. ``_.htex`` in the directory of ``p``, the wildcard handler (dynamic).
6. ``<root>/p.html`` (static; usually a pre-generated index page).

Anything else is unresolved and answers 404.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from htex.engine.paths import clean_url_path

logger = logging.getLogger("htex.routing")

HTEX_SUFFIX = ".htex"
WILDCARD_NAME = "_.htex"
WELL_KNOWN = ".well-known"


class ResolutionKind(Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True, slots=True)
class Resolution:
    """A resolved file and how to serve it.

    ``content_type`` is set when the resolver knows better than the file
    extension (the ``.html`` fallback).
    """

    kind: ResolutionKind
    path: Path
    content_type: str | None = None

    @property
    def is_dynamic(self) -> bool:
        return self.kind is ResolutionKind.DYNAMIC


def is_hidden(url_path: str) -> bool:
    """True if any segment of *url_path* is a dot-file, ``.well-known`` aside."""
    return any(
        segment.startswith(".") and segment not in (".", "..", WELL_KNOWN)
        for segment in url_path.split("/")
    )


class FileResolver:
    """Resolves URL paths against one content root.

    Stateless apart from the root; every call looks at the filesystem
    afresh, so edits show up on the next request.
    """

    __slots__ = ("root",)

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, url_path: str) -> Resolution | None:
        """Return how to serve *url_path*, or None for 404."""
        url = clean_url_path(url_path if url_path.startswith("/") else "/" + url_path)
        if url.endswith(HTEX_SUFFIX):
            return None
        if is_hidden(url):
            logger.debug(" -> ignore hidden dir %s", url)
            return None

        target = self.root / url.lstrip("/")

        if target.is_file():
            logger.debug(" -> static file %s", target)
            return Resolution(ResolutionKind.STATIC, target)

        if target.is_dir():
            target = target / "index"

        page = target.with_name(target.name + HTEX_SUFFIX)
        if page.is_file():
            logger.debug(" -> dynamic file %s", page)
            return Resolution(ResolutionKind.DYNAMIC, page)

        wildcard = target.parent / WILDCARD_NAME
        if wildcard.is_file():
            logger.debug(" -> dynamic file %s", wildcard)
            return Resolution(ResolutionKind.DYNAMIC, wildcard)

        fallback = target.with_name(target.name + ".html")
        if fallback.is_file():
            logger.debug(" -> static file %s", fallback)
            return Resolution(ResolutionKind.STATIC, fallback, "text/html; charset=utf-8")

        return None
