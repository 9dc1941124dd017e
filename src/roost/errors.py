"""Roost exception hierarchy.

Shared across the component engine, Router, Application, and the ASGI
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when routing or application configuration is invalid.

    Typically raised while a component is being materialized, so the
    failure surfaces before any request is dispatched.
    """


class DirectiveError(ConfigurationError):
    """A directive was recorded with an invalid shape.

    Raised by the recorder call itself, e.g. ``get("/")`` with no handlers.
    """


class ComponentError(RoostError):
    """A component misbehaved during materialization.

    Components must register synchronously; returning a coroutine
    from a component is reported with this error.
    """


class NoActiveComponent(RoostError, RuntimeError):  # noqa: N818
    """A directive recorder was called outside any materialization."""

    def __init__(self, recorder: str) -> None:
        super().__init__(
            f"{recorder}() was called outside a component. Directives can only "
            "be recorded while routerify(), routes(), appify() or listen() "
            "is running a component."
        )
        self.recorder = recorder


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — nothing in the middleware pipeline handled the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


def _allow_header(allowed: frozenset[str]) -> tuple[tuple[str, str], ...]:
    return (("Allow", ", ".join(sorted(allowed))),)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow = _allow_header(allowed)
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow[0][1]}",
            headers=allow,
        )


class MethodNotImplemented(HTTPError):  # noqa: N818
    """501 — the method is not one the router was declared to handle."""

    def __init__(self, method: str, allowed: frozenset[str] = frozenset(), detail: str = "") -> None:
        super().__init__(
            status=501,
            detail=detail or f"Method {method} is not implemented by this router",
            headers=_allow_header(allowed) if allowed else (),
        )
