"""Declarative directive recorders.

Call these inside a component to describe routes. Each call appends one
directive to the frame of the component currently being materialized
and does nothing else; the router is built later, when the component
returns.

Usage::

    from roost import get, post, prefix, routes, use

    def books():
        prefix("/books")
        get("/", list_books)
        get("book", "/:id", show_book)
        post("/", create_book)

    def api():
        use(log_requests)
        use("/v1", routes(books))

Calling a recorder outside a component raises ``NoActiveComponent``.
"""

from collections.abc import Sequence

from roost._internal.types import Handler, ParamHandler
from roost.directives import Param, Prefix, Redirect, Use, Verb
from roost.frames import current_recorder


def all_(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for *path* under every method the router declares.

    Accepts ``(path, *handlers)`` or ``(name, path, *handlers)``.
    """
    return current_recorder("all_").all_(path, *handlers, name=name)


def get(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``GET`` (and ``HEAD``) requests to *path*."""
    return current_recorder("get").get(path, *handlers, name=name)


def post(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``POST`` requests to *path*."""
    return current_recorder("post").post(path, *handlers, name=name)


def put(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``PUT`` requests to *path*."""
    return current_recorder("put").put(path, *handlers, name=name)


def patch(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``PATCH`` requests to *path*."""
    return current_recorder("patch").patch(path, *handlers, name=name)


def delete(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``DELETE`` requests to *path*."""
    return current_recorder("delete").delete(path, *handlers, name=name)


def head(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``HEAD`` requests to *path*."""
    return current_recorder("head").head(path, *handlers, name=name)


def options(path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
    """Register handlers for ``OPTIONS`` requests to *path*."""
    return current_recorder("options").options(path, *handlers, name=name)


def use(*middleware: object, path: str | Sequence[str] | None = None) -> Use:
    """Register middleware for the component.

    ``use(mw)`` runs for every path through the component;
    ``use("/path", mw)`` or ``use(["/a", "/b"], mw)`` scopes it.
    Passing ``routes(child)`` mounts a child component.
    """
    return current_recorder("use").use(*middleware, path=path)


def param(name: str, handler: ParamHandler) -> Param:
    """Run *handler* as ``(value, request, next)`` whenever a route with
    parameter *name* matches, before the route's own handlers."""
    return current_recorder("param").param(name, handler)


def prefix(path: str) -> Prefix:
    """Set the router prefix for this component."""
    return current_recorder("prefix").prefix(path)


def redirect(source: str, destination: str, status: int = 302) -> Redirect:
    """Redirect requests for *source* to *destination* with *status*.

    *source* and *destination* may be route names; *destination* may be
    an absolute URL.
    """
    return current_recorder("redirect").redirect(source, destination, status)
