"""Static site generation.

Every ``.htex`` page under the content root is rendered as a plain ``GET``
of its own URL into ``<output>/<url>/index.html``; every other file is
copied unchanged.  The output tree can then be served by any static file
server, with the same URLs the live server answers.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from htex.engine.context import RenderContext
from htex.engine.parser import Parser
from htex.engine.renderer import Renderer
from htex.errors import HtexError
from htex.scan import scan_files

logger = logging.getLogger("htex.gen")


class FileSink:
    """Sink that creates its output file on the first written byte.

    A page that renders nothing leaves no file behind.
    """

    __slots__ = ("_file", "path")

    def __init__(self, path: Path) -> None:
        self.path = path
        self._file: BinaryIO | None = None

    def write(self, data: bytes, /) -> None:
        if self._file is None:
            self._file = self.path.open("wb")
        self._file.write(data)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def page_output_path(output: Path, url: str) -> Path:
    """``<output>/<url>/index.html`` for a page URL."""
    return output.joinpath(url.strip("/"), "index.html")


def generate_static_content(parser: Parser, renderer: Renderer, root: Path, output: Path) -> int:
    """Render and copy the whole content *root* into *output*.

    Failures are logged per file and generation moves on.

    Returns:
        Number of files that failed.
    """
    failures = 0

    def announce(source: Path, target: Path) -> None:
        print(source, "->", target)
        target.parent.mkdir(parents=True, exist_ok=True)

    def dynamic(source: Path, url: str) -> None:
        nonlocal failures
        target = page_output_path(output, url)
        announce(source, target)
        try:
            page = parser.parse_file(source)
            with FileSink(target) as sink:
                renderer.render(page, RenderContext.for_get(url), sink)
        except (HtexError, OSError) as exc:
            failures += 1
            logger.error("cannot generate %s: %s", target, exc)

    def static(source: Path, url: str) -> None:
        nonlocal failures
        target = output / url.lstrip("/")
        announce(source, target)
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            failures += 1
            logger.error("cannot copy %s: %s", source, exc)

    scan_files(root, dynamic, static)
    return failures
