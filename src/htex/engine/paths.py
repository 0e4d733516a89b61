"""Path rules shared by the parser, renderer, and resolver."""

import posixpath
from pathlib import Path


def clean_url_path(path: str) -> str:
    """Lexically normalize a URL path.

    ``/a/./b/../c/`` becomes ``/a/c``; an empty path becomes ``.``.
    """
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    # normpath keeps exactly two leading slashes (POSIX allows them to mean
    # something); URLs do not
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def resolve_reference(root: Path, relative_to: Path, reference: str) -> Path:
    """Resolve a path written inside a template.

    ``/x`` is taken from the content *root*; anything else is relative to
    the directory of the file that contains the reference.
    """
    if reference.startswith("/"):
        return root / clean_url_path(reference).lstrip("/")
    return Path(posixpath.normpath(str(relative_to.parent / reference)))
