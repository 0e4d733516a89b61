"""Error pages for failed requests.

Maps HTTPError exceptions and unexpected failures to small HTML pages
rendered with kida.
"""

from __future__ import annotations

import functools
import logging
from http import HTTPStatus
from typing import TYPE_CHECKING

from kida import Environment

from htex.errors import HTTPError
from htex.http.request import Request
from htex.http.response import Response

if TYPE_CHECKING:
    from kida.template import Template

logger = logging.getLogger("htex.server")

ERROR_PAGE = """\
<!doctype html>
<html>
<head><title>{{ status }} {{ phrase }}</title></head>
<body>
<h1>{{ status }} {{ phrase }}</h1>
{% if detail %}<p>{{ detail }}</p>{% end %}
</body>
</html>
"""


@functools.cache
def _error_template() -> Template:
    return Environment(autoescape=True).from_string(ERROR_PAGE)


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Error"


def error_page(status: int, detail: str = "") -> Response:
    """An HTML error response for *status*."""
    phrase = _phrase(status)
    if detail == phrase:
        detail = ""
    body = _error_template().render(status=status, phrase=phrase, detail=detail)
    return Response(body=body, status=status)


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to its error page."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = error_page(exc.status, exc.detail)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    return error_page(500)
