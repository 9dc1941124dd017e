"""ASGI handler — translates ASGI scope/messages to roost types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through the middleware pipeline,
and sends the Response back through ASGI send().
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke_middleware
from roost.errors import HTTPError, NotFound
from roost.http.request import Request
from roost.http.response import Response
from roost.server.errors import ErrorHandlers, handle_http_error, handle_internal_error
from roost.server.negotiation import negotiate
from roost.server.sender import send_response

# A composed chain: takes a request, resolves to a response
type Pipeline = Callable[[Request], Awaitable[Response]]


def compose(middleware: Sequence[Callable[..., Any]]) -> Pipeline:
    """Wrap *middleware* around a terminal that raises ``NotFound``.

    The first middleware is outermost. Every return value is negotiated,
    so each ``next`` resolves to a ``Response``.
    """

    async def not_found(request: Request) -> Response:
        raise NotFound(f"No middleware handled {request.method} {request.path!r}")

    handler: Pipeline = not_found
    for mw in reversed(middleware):

        async def step(
            request: Request,
            _mw: Callable[..., Any] = mw,
            _next: Pipeline = handler,
        ) -> Response:
            async def call_next(downstream: Request | None = None) -> Response:
                return await _next(downstream or request)

            return negotiate(await invoke_middleware(_mw, request, call_next))

        handler = step
    return handler


async def dispatch(
    request: Request,
    pipeline: Pipeline,
    *,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Run *request* through *pipeline*, mapping errors to responses."""
    try:
        return await pipeline(request)
    except HTTPError as exc:
        return await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        return await handle_internal_error(exc, request, error_handlers, debug)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Pipeline,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(dict(scope), receive)
    response = await dispatch(request, pipeline, error_handlers=error_handlers, debug=debug)
    await send_response(response, send, head=request.method == "HEAD")
