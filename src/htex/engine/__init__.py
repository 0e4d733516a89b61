"""Template engine: tokenizer, element model, parser, renderer.

Parsing happens once per request and produces a plain ``HtexFile`` tree;
rendering walks that tree against a ``RenderContext``::

    parser = Parser(root)
    page = parser.parse_file(root / "index.htex")
    Renderer(root).render(page, RenderContext.for_get("/"), sink)
"""

from htex.engine.context import RenderContext
from htex.engine.elements import Element, ElemKind, HtexFile
from htex.engine.parser import Parser
from htex.engine.renderer import Renderer, Sink
from htex.engine.tokenizer import Token, Tokenizer, TokenKind, tokenize

__all__ = [
    "ElemKind",
    "Element",
    "HtexFile",
    "Parser",
    "RenderContext",
    "Renderer",
    "Sink",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
]
