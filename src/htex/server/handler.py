"""ASGI handler: translates ASGI scope/messages to htex types.

The only component that touches raw ASGI directly.  Converts the scope to
a Request, runs it through the middleware chain into *dispatch*, and
sends the Response back through ASGI send().
"""

from collections.abc import Awaitable, Callable

from htex._internal.asgi import Receive, Scope, Send
from htex.errors import HTTPError
from htex.http.request import Request
from htex.http.response import Response
from htex.middleware.protocol import Middleware, Next
from htex.server.errors import handle_http_error, handle_internal_error
from htex.server.sender import send_response

type Dispatch = Callable[[Request], Awaitable[Response]]


def build_pipeline(dispatch: Dispatch, middleware: tuple[Middleware, ...]) -> Next:
    """Wrap *dispatch* in *middleware*, first entry outermost."""
    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Middleware = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Next,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request)

    await send_response(response, send, head=request.method == "HEAD")
