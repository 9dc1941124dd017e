"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Route handlers registered with ``get()``, ``post()`` and friends share
the same shape; they may also omit ``next`` and accept only the request.
"""

from roost.middleware.protocol import AnyResponse, Middleware, Next

__all__ = [
    "AnyResponse",
    "Middleware",
    "Next",
]
