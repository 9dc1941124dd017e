"""Components: run one, then replay what it recorded.

``materialize()`` opens a frame, calls the component, closes the frame,
and replays the captured directives in recorded order onto a fresh
``Router`` (and, for the application target, an ``Application`` that
mounts it). The adapters below are thin compositions over it.

Usage::

    from roost import get, listen, routes, use

    def users():
        get("/:id", show_user)

    def app():
        use(log_requests)
        use("/users", routes(users))

    listen(app)
"""

import inspect
import logging
from enum import Enum
from typing import Literal, overload

from roost._internal.types import Component
from roost.app import Application
from roost.config import AllowedMethodsOptions, AppConfig, RouterOptions
from roost.directives import ALL, Directive, Param, Prefix, Redirect, Use, Verb
from roost.errors import ComponentError
from roost.frames import open_frame
from roost.routing.router import AllowedMethodsMiddleware, Router, RoutesMiddleware

logger = logging.getLogger("roost.components")


class Target(Enum):
    """What ``materialize()`` builds."""

    ROUTER = "router"
    APPLICATION = "application"


def _label(component: Component) -> str:
    return getattr(component, "__qualname__", None) or repr(component)


def capture(component: Component) -> tuple[Directive, ...]:
    """Run *component* in a fresh frame and return what it recorded.

    The frame is closed on every exit path. A component that returns an
    awaitable is rejected: directives must be recorded synchronously.
    """
    label = _label(component)
    with open_frame(label) as recorder:
        result = component()
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            msg = (
                f"Component {label} returned an awaitable. Components must record "
                "their routes synchronously; make it a plain def."
            )
            raise ComponentError(msg)
        return recorder.frame.directives


def replay(
    directives: tuple[Directive, ...],
    router: Router,
    app: Application | None = None,
) -> None:
    """Apply *directives* to *router* in order.

    Path-less ``Use`` directives go to *app* when one is given, otherwise
    to the router as unscoped middleware.
    """
    for directive in directives:
        match directive:
            case Verb(methods=methods, path=path, handlers=handlers, name=name):
                expanded = set(methods - {ALL})
                if ALL in methods:
                    expanded |= router.config.methods
                router.register(path, expanded, handlers, name=name)
            case Use(handlers=handlers, path=None) if app is not None:
                app.use(*handlers)
            case Use(handlers=handlers, path=path):
                router.use(*handlers, path=path)
            case Param(name=name, handler=handler):
                router.param(name, handler)
            case Prefix(path=path):
                router.prefix(path)
            case Redirect(source=source, destination=destination, status=status):
                router.redirect(source, destination, status)


@overload
def materialize(
    component: Component,
    target: Literal[Target.ROUTER] = ...,
    *,
    router_options: RouterOptions | None = ...,
    app_config: AppConfig | None = ...,
) -> Router: ...


@overload
def materialize(
    component: Component,
    target: Literal[Target.APPLICATION],
    *,
    router_options: RouterOptions | None = ...,
    app_config: AppConfig | None = ...,
) -> Application: ...


def materialize(
    component: Component,
    target: Target = Target.ROUTER,
    *,
    router_options: RouterOptions | None = None,
    app_config: AppConfig | None = None,
) -> Router | Application:
    """Build a router, or an application mounting one, from *component*.

    Errors raised by the component or during replay propagate; nothing
    partially built is returned.
    """
    directives = capture(component)
    router = Router(router_options)
    app = Application(app_config) if target is Target.APPLICATION else None
    replay(directives, router, app)
    logger.debug(
        "materialized %s as %s: %d directive(s), %d layer(s)",
        _label(component),
        target.value,
        len(directives),
        len(router.layers),
    )
    if app is None:
        return router
    app.use(router.routes())
    return app


def routerify(component: Component, options: RouterOptions | None = None) -> Router:
    """Materialize *component* into a ``Router``."""
    return materialize(component, Target.ROUTER, router_options=options)


def routes(component: Component, options: RouterOptions | None = None) -> RoutesMiddleware:
    """Materialize *component* and return its dispatching middleware.

    Pass the result to ``use()`` in a parent component to mount it.
    """
    return routerify(component, options).routes()


def allowed_methods(
    component: Component,
    options: AllowedMethodsOptions | None = None,
    *,
    router_options: RouterOptions | None = None,
) -> AllowedMethodsMiddleware:
    """Materialize *component* and return its ``OPTIONS``/405/501 middleware."""
    return routerify(component, router_options).allowed_methods(options)


def appify(
    component: Component,
    config: AppConfig | None = None,
    *,
    router_options: RouterOptions | None = None,
) -> Application:
    """Materialize *component* into an ``Application``.

    Path-less ``use()`` calls become application middleware and run
    before the component's routes.
    """
    return materialize(
        component,
        Target.APPLICATION,
        router_options=router_options,
        app_config=config,
    )


def listen(
    component: Component,
    config: AppConfig | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
    router_options: RouterOptions | None = None,
) -> Application:
    """Materialize *component* into an application and serve it.

    Blocks until the server stops; returns the application afterwards.
    """
    app = appify(component, config, router_options=router_options)
    app.listen(host=host, port=port)
    return app
