"""Map exceptions raised by the pipeline to responses.

``HTTPError`` subclasses carry their own status and headers. Anything else
is an internal error: logged with its traceback and answered with 500.
A handler registered through ``Application.error`` wins in both cases.
"""

import logging
from collections.abc import Callable
from typing import Any

from roost._internal.invoke import invoke_middleware
from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response
from roost.server.negotiation import negotiate

logger = logging.getLogger("roost.server")

type ErrorHandlers = dict[int | type, Callable[..., Any]]

_TEXT = "text/plain; charset=utf-8"


def _lookup(error_handlers: ErrorHandlers, *keys: int | type) -> Callable[..., Any] | None:
    for key in keys:
        handler = error_handlers.get(key)
        if handler is not None:
            return handler
    return None


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
) -> Response:
    """Run a registered error handler and coerce its result.

    Handlers take ``()``, ``(request)`` or ``(request, exc)``. A plain 200
    result keeps the error's *status*.
    """
    response = negotiate(await invoke_middleware(handler, request, exc))
    if response.status == 200:
        response = response.with_status(status)
    return response


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Answer an HTTPError, by registered handler or as plain text."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = _lookup(error_handlers, type(exc), exc.status)
    if handler is not None:
        return await call_error_handler(handler, request, exc, exc.status)

    if exc.detail:
        body = f"{exc.status}: {exc.detail}" if debug else exc.detail
    else:
        body = f"Error {exc.status}"
    response = Response(body=body, status=exc.status, content_type=_TEXT)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Log *exc* and answer 500."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = _lookup(error_handlers, 500, type(exc))
    if handler is not None:
        return await call_error_handler(handler, request, exc, 500)

    body = "Internal Server Error"
    if debug:
        body = f"{body}\n\n{type(exc).__name__}: {exc}"
    return Response(body=body, status=500, content_type=_TEXT)
