"""Roost application class.

Mutable during setup (middleware, error handlers, lifecycle hooks).
Frozen at runtime when ``listen()``, ``handle()`` or ``__call__()`` is
first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.types import ErrorHandler, Handler
from roost.config import AppConfig
from roost.errors import ConfigurationError
from roost.http.request import Request
from roost.http.response import Response
from roost.server.handler import Pipeline, compose, dispatch, handle_request

logger = logging.getLogger("roost.app")


class Application:
    """A middleware pipeline served over ASGI.

    Middleware runs in registration order; the first one added is the
    outermost. A request nothing answers ends in ``NotFound`` (404).

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread composes the pipeline, even
        when several ASGI workers call ``__call__()`` on first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        # Compiled state (populated by _freeze)
        "_middleware",
        "_middleware_list",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._middleware_list: list[Handler] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._middleware: Pipeline | None = None

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "setup"
        return f"<Application {state} middleware={len(self._middleware_list)}>"

    # -- Middleware --

    def use(self, *middleware: Handler) -> "Application":
        """Append middleware to the pipeline. Returns the app for chaining."""
        self._check_not_frozen()
        if not middleware:
            msg = "use() requires at least one middleware"
            raise ConfigurationError(msg)
        for mw in middleware:
            if not callable(mw):
                msg = f"Middleware must be callable, got {type(mw).__name__}"
                raise ConfigurationError(msg)
            self._middleware_list.append(mw)
        return self

    @property
    def middleware(self) -> tuple[Handler, ...]:
        return tuple(self._middleware_list)

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def listen(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the application with pounce until interrupted.

        Args:
            host: Override ``config.host``.
            port: Override ``config.port``.
        """
        self._ensure_frozen()

        from roost.server.serve import run_server

        run_server(
            self,
            host or self.config.host,
            port if port is not None else self.config.port,
            reload=self.config.reload,
            workers=self.config.workers,
        )

    # -- Request handling --

    async def handle(self, request: Request) -> Response:
        """Run *request* through the pipeline and return the response.

        Errors are mapped to responses the same way as under ASGI.
        """
        self._ensure_frozen()
        assert self._middleware is not None
        return await dispatch(
            request,
            self._middleware,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._middleware is not None

        await handle_request(
            scope,
            receive,
            send,
            pipeline=self._middleware,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, then runs registered startup and
        shutdown hooks and signals completion back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compose the middleware pipeline.

        MUST only be called while holding _freeze_lock.
        """
        self._middleware = compose(tuple(self._middleware_list))
        self._frozen = True
        logger.debug("application frozen with %d middleware", len(self._middleware_list))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the application after it has started serving requests. "
                "Add middleware and error handlers before calling listen()."
            )
            raise RuntimeError(msg)
