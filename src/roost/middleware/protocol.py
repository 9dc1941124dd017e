"""Middleware shape and the ``next`` continuation.

Everything roost runs in a chain is written in the same shape::

    async def handler(request: Request, next: Next) -> AnyResponse: ...

``next`` may be called bare to continue with the same request, or with a
replacement request. It always resolves to a ``Response``: whatever the
downstream handler returned has already been negotiated.
"""

from typing import Any, Protocol

from roost.http.request import Request
from roost.http.response import Redirect, Response

# Any value a handler may return; the negotiator turns it into a Response
type AnyResponse = Response | Redirect | str | bytes | dict[str, Any] | list[Any] | None


class Next(Protocol):
    """Continuation passed as the second argument to a handler."""

    async def __call__(self, request: Request | None = None, /) -> Response: ...


class Middleware(Protocol):
    """A ``(request, next)`` callable.

    Functions and callable objects both qualify; ``Router.routes()``
    returns the latter.
    """

    async def __call__(self, request: Request, next: Next, /) -> AnyResponse: ...
