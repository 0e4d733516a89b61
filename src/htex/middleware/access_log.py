"""Verbose request logging.

Installed when the server runs with ``--verbose``.  Logs the request line
before dispatch and the status and elapsed time after::

    127.0.0.1:50412 GET /blog/?page=2
     -> response code 200 time 1.84ms
"""

import logging
import time

from htex.errors import HTTPError
from htex.http.request import Request
from htex.http.response import Response
from htex.middleware.protocol import Next

logger = logging.getLogger("htex.access")


def _format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.3f}s"


class AccessLog:
    """Middleware logging every request and its outcome on ``htex.access``."""

    __slots__ = ("_logger",)

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    async def __call__(self, request: Request, next: Next) -> Response:
        self._logger.info("%s %s %s", request.remote_addr, request.method, request.url)
        start = time.perf_counter()
        try:
            response = await next(request)
        except HTTPError as exc:
            self._log_outcome(exc.status, start)
            raise
        except Exception:
            self._log_outcome(500, start)
            raise
        self._log_outcome(response.status, start)
        return response

    def _log_outcome(self, status: int, start: float) -> None:
        elapsed = _format_elapsed(time.perf_counter() - start)
        self._logger.info(" -> response code %d time %s", status, elapsed)
