"""htex: a minimal hypertext templating engine.

``.htex`` files are HTML with a handful of ``<!tag>`` directives: layouts,
per-method sections, variables, request data, and file includes.  Pages are
parsed and rendered on every request, so the content root is the whole
application.

Basic usage::

    from htex import Htex, HtexConfig

    app = Htex(HtexConfig(root="public"))
    app.run()

Or from the command line::

    htex server --root public --port 8080
    htex gen --root public --output site
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "Htex",
    "HtexConfig",
    "HtexError",
    "LayoutParseFailure",
    "NotFound",
    "Parser",
    "RenderContext",
    "Renderer",
    "SourceNotFound",
    "TemplateError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import htex`` fast while providing a clean top-level API.
    """
    if name == "Htex":
        from htex.app import Htex

        return Htex

    if name == "HtexConfig":
        from htex.config import HtexConfig

        return HtexConfig

    if name in ("Parser", "Renderer", "RenderContext"):
        from htex import engine as _engine

        return getattr(_engine, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "HtexError",
        "LayoutParseFailure",
        "NotFound",
        "SourceNotFound",
        "TemplateError",
    ):
        from htex import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
