"""Roost — declarative route trees built from plain functions.

A component is a function that describes routes by calling free-standing
recorders instead of methods on a router object. Components mount other
components, and the whole tree is materialized into a router or an ASGI
application.

Basic usage::

    from roost import get, listen, param, prefix, routes, use

    def show_user(request):
        return {"id": request.path_params["id"]}

    def users():
        prefix("/users")
        get("user", "/:id", show_user)

    def app():
        use(log_requests)
        use("/api", routes(users))

    listen(app)

Serving needs pounce (``pip install roost[server]``); ``appify(app)``
returns an ASGI callable for any other server.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AllowedMethodsOptions",
    "AnyResponse",
    "AppConfig",
    "Application",
    "ComponentError",
    "ConfigurationError",
    "DirectiveError",
    "HTTPError",
    "MethodNotAllowed",
    "MethodNotImplemented",
    "Middleware",
    "Next",
    "NoActiveComponent",
    "NotFound",
    "Recorder",
    "Redirect",
    "Request",
    "Response",
    "RoostError",
    "Router",
    "RouterOptions",
    "all_",
    "allowed_methods",
    "appify",
    "current_recorder",
    "delete",
    "get",
    "head",
    "listen",
    "materialize",
    "options",
    "param",
    "patch",
    "post",
    "prefix",
    "put",
    "redirect",
    "routerify",
    "routes",
    "use",
]

_HOOKS = (
    "all_",
    "delete",
    "get",
    "head",
    "options",
    "param",
    "patch",
    "post",
    "prefix",
    "put",
    "redirect",
    "use",
)

_ADAPTERS = ("allowed_methods", "appify", "listen", "materialize", "routerify", "routes")

_ERRORS = (
    "ComponentError",
    "ConfigurationError",
    "DirectiveError",
    "HTTPError",
    "MethodNotAllowed",
    "MethodNotImplemented",
    "NoActiveComponent",
    "NotFound",
    "RoostError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name in _HOOKS:
        from roost import hooks as _hooks

        return getattr(_hooks, name)

    if name in _ADAPTERS:
        from roost import components as _components

        return getattr(_components, name)

    if name in ("Recorder", "current_recorder"):
        from roost import frames as _frames

        return getattr(_frames, name)

    if name == "Application":
        from roost.app import Application

        return Application

    if name == "Router":
        from roost.routing.router import Router

        return Router

    if name in ("AllowedMethodsOptions", "AppConfig", "RouterOptions"):
        from roost import config as _config

        return getattr(_config, name)

    if name == "Request":
        from roost.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from roost.http import response as _resp

        return getattr(_resp, name)

    if name in ("AnyResponse", "Middleware", "Next"):
        from roost.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in _ERRORS:
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
