"""Walk a content root and classify every file.

``.htex`` sources are dynamic: their URL is the path without the suffix,
with a trailing ``/index`` collapsed to ``/``.  Everything else is static
and keeps its own path as URL.  Hidden files and directories are skipped,
``.well-known`` excepted.
"""

import os
from collections.abc import Callable
from pathlib import Path

from htex.routing.resolver import HTEX_SUFFIX, WELL_KNOWN

# (source file, URL path)
type FileCallback = Callable[[Path, str], None]


def _visible(name: str) -> bool:
    return not name.startswith(".") or name == WELL_KNOWN


def page_url(relative: str) -> str:
    """URL for an ``.htex`` file at *relative* (``/``-separated, rooted)."""
    url = relative.removesuffix(HTEX_SUFFIX)
    if url.endswith("/index"):
        url = url.removesuffix("index")
    return url


def scan_files(root: str | Path, dynamic: FileCallback, static: FileCallback) -> None:
    """Call *dynamic* or *static* for each file under *root*, in sorted order."""
    root = Path(root)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if _visible(d))
        base = Path(dirpath)
        for name in sorted(filenames):
            if not _visible(name):
                continue
            full = base / name
            relative = "/" + full.relative_to(root).as_posix()
            if name.endswith(HTEX_SUFFIX):
                dynamic(full, page_url(relative))
            else:
                static(full, relative)
