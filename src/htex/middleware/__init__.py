"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching::

    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AccessLog -- Request line, status and timing on the ``htex.access`` logger
"""

from htex.middleware.access_log import AccessLog
from htex.middleware.protocol import Middleware, Next

__all__ = ["AccessLog", "Middleware", "Next"]
