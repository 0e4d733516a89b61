"""The htex application: one content root served over ASGI.

``Htex`` ties the pieces together.  A request path goes through the
``FileResolver``; static files are returned as they are, ``.htex`` pages
are parsed and rendered for that request.  Each render builds its own
parse tree and variable scope, so nothing is shared between requests and
edits on disk show up on the next request.

Usage::

    from htex import Htex, HtexConfig

    app = Htex(HtexConfig(root="public", port=8080, verbose=True))
    app.run()

Or mount ``app`` in any ASGI server.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

import anyio.to_thread

from htex._internal.asgi import Receive, Scope, Send
from htex.config import HtexConfig
from htex.engine.context import RenderContext
from htex.engine.parser import Parser
from htex.engine.renderer import MarkdownTransform, Renderer, Sink
from htex.errors import NotFound
from htex.http.request import Request
from htex.http.response import Response
from htex.middleware.access_log import AccessLog
from htex.middleware.protocol import Middleware
from htex.routing.resolver import FileResolver, ResolutionKind
from htex.server.handler import build_pipeline, handle_request
from htex.server.static import file_response

logger = logging.getLogger("htex.server")

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class Htex:
    """ASGI application serving one htex content root.

    Args:
        config: Root, server and generation settings.
        markdown: Override the ``<!include-markdown>`` transform.
        middleware: Extra middleware, run inside the access log.
    """

    def __init__(
        self,
        config: HtexConfig | None = None,
        *,
        markdown: MarkdownTransform | None = None,
        middleware: tuple[Middleware, ...] = (),
    ) -> None:
        self.config = config or HtexConfig()
        root = self.config.root_path
        self.parser = Parser(
            root,
            keep_comments=self.config.keep_comments,
            chunk_size=self.config.read_chunk_size,
        )
        self.renderer = Renderer(root, markdown=markdown or self._default_markdown())
        self.resolver = FileResolver(root)

        # Chosen once: the access log only exists in verbose mode
        chain: tuple[Middleware, ...] = (AccessLog(),) if self.config.verbose else ()
        self.middleware = (*chain, *middleware)
        self._pipeline = build_pipeline(self._dispatch, self.middleware)

    def _default_markdown(self) -> MarkdownTransform | None:
        plugins = self.config.markdown_plugins
        if plugins == ("all",):
            # Renderer creates the default transform lazily
            return None
        from htex.markdown import MarkdownRenderer

        return MarkdownRenderer(plugins=plugins)

    # -- Rendering --

    def render_to(self, path: str | Path, context: RenderContext, sink: Sink) -> None:
        """Parse the page at *path* and render it for *context* into *sink*.

        Raises:
            SourceNotFound: The page cannot be opened.
            LayoutParseFailure: One of its layouts cannot be parsed.
        """
        page = self.parser.parse_file(path)
        self.renderer.render(page, context, sink)

    def render_file(self, path: str | Path, context: RenderContext | None = None) -> bytes:
        """Render the page at *path* and return the output bytes."""
        buffer = BytesIO()
        self.render_to(path, context or RenderContext(), buffer)
        return buffer.getvalue()

    async def _dispatch(self, request: Request) -> Response:
        resolution = self.resolver.resolve(request.path)
        if resolution is None:
            raise NotFound

        if resolution.kind is ResolutionKind.STATIC:
            return await anyio.to_thread.run_sync(file_response, resolution.path, resolution.content_type)

        context = await RenderContext.from_request(request)
        body = await anyio.to_thread.run_sync(self.render_file, resolution.path, context)
        return Response(body=body, content_type=HTML_CONTENT_TYPE)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, pipeline=self._pipeline)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan events; there is nothing to set up."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Entry points --

    def run(self) -> None:
        """Serve the content root until interrupted.

        Raises:
            ConfigurationError: The content root is not a directory.
        """
        from htex.server.serve import run_server, server_url

        root = self.config.require_root()
        print(f"htex server at {server_url(self.config)} for {root}")
        run_server(self, self.config)

    def generate(self, output: str | Path | None = None) -> int:
        """Write the static version of the content root to *output*.

        Returns:
            Number of files that failed.

        Raises:
            ConfigurationError: The content root is not a directory.
        """
        from htex.gen import generate_static_content

        root = self.config.require_root()
        target = Path(output).absolute() if output is not None else self.config.output_path
        return generate_static_content(self.parser, self.renderer, root, target)
