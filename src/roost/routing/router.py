"""Layer-stack router.

Routes and middleware are kept in registration order. A request runs
every layer whose path matches (and, for route layers, whose methods
include the request method), in order, each handler deciding whether
to call ``next``. When the chain is exhausted the request continues to
whatever middleware follows the router.

Usage::

    router = Router()
    router.get("/users/:id", show_user, name="user")
    router.use(auth, path="/admin")
    app.use(router.routes(), router.allowed_methods())
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import urlencode, urlsplit

from roost._internal.invoke import invoke_middleware
from roost._internal.types import Handler, ParamHandler
from roost.config import AllowedMethodsOptions, RouterOptions
from roost.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    MethodNotImplemented,
    NotFound,
)
from roost.http.request import Request
from roost.http.response import Redirect, Response
from roost.middleware.protocol import Next
from roost.routing.layer import Layer, Matched
from roost.server.negotiation import negotiate

logger = logging.getLogger("roost.routing")

REDIRECT_STATUSES = frozenset({300, 301, 302, 303, 304, 305, 307, 308})


def is_absolute_url(value: str) -> bool:
    """True for ``scheme://host...`` URLs."""
    parts = urlsplit(value)
    return bool(parts.scheme and parts.netloc)


class Router:
    """An ordered stack of route and middleware layers.

    Mutable during setup. ``routes()`` and ``allowed_methods()`` return
    middleware that read the stack at request time.
    """

    __slots__ = ("_layers", "_params", "_prefix", "config")

    def __init__(self, options: RouterOptions | None = None) -> None:
        self.config: RouterOptions = options or RouterOptions()
        self._layers: list[Layer] = []
        self._params: dict[str, list[ParamHandler]] = {}
        self._prefix: str = self.config.prefix

    # -- Introspection --

    @property
    def layers(self) -> tuple[Layer, ...]:
        """All layers in dispatch order."""
        return tuple(self._layers)

    @property
    def current_prefix(self) -> str:
        return self._prefix

    def __repr__(self) -> str:
        return f"<Router prefix={self._prefix!r} layers={len(self._layers)}>"

    # -- Registration --

    def register(
        self,
        path: str,
        methods: Iterable[str],
        handlers: Sequence[Handler],
        *,
        name: str | None = None,
        end: bool = True,
    ) -> Layer:
        """Add a layer for *path* answering *methods* with *handlers*.

        An empty *methods* makes a middleware layer. Returns the layer.
        """
        if not handlers:
            msg = f"At least one handler is required to register {path!r}"
            raise ConfigurationError(msg)
        layer = Layer(
            base=path,
            methods=frozenset(m.upper() for m in methods),
            stack=tuple(handlers),
            name=name,
            end=end,
            strict=self.config.strict,
            sensitive=self.config.sensitive,
            prefix=self._prefix,
        )
        self._add(layer)
        logger.debug(
            "registered %s %s -> %d handler(s)",
            ",".join(sorted(layer.methods)) or "*",
            layer.path,
            len(layer.stack),
        )
        return layer

    def _add(self, layer: Layer) -> None:
        self._apply_params(layer)
        self._layers.append(layer)

    def _apply_params(self, layer: Layer) -> None:
        for param_name, hooks in self._params.items():
            for hook in hooks:
                layer.add_param_hook(param_name, hook)

    def route(self, method: str, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        """Register *handlers* for one *method* (or ``"ALL"``) at *path*."""
        method = method.upper()
        methods = self.config.methods if method == "ALL" else (method,)
        return self.register(path, methods, handlers, name=name)

    def all(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        """Register *handlers* for every method this router declares."""
        return self.register(path, self.config.methods, handlers, name=name)

    def get(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("GET", path, *handlers, name=name)

    def post(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("POST", path, *handlers, name=name)

    def put(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("PUT", path, *handlers, name=name)

    def patch(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("PATCH", path, *handlers, name=name)

    def delete(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("DELETE", path, *handlers, name=name)

    def head(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("HEAD", path, *handlers, name=name)

    def options(self, path: str, *handlers: Handler, name: str | None = None) -> Layer:
        return self.route("OPTIONS", path, *handlers, name=name)

    def use(self, *middleware: Handler, path: str | Sequence[str] | None = None) -> "Router":
        """Add middleware, optionally scoped to *path* (or each of several paths).

        Middleware produced by another router's ``routes()`` is mounted
        structurally: the child's layers are cloned under *path*, so the
        child's own prefix and param hooks carry over.
        """
        if not middleware:
            msg = "use() requires at least one middleware"
            raise ConfigurationError(msg)
        paths: Sequence[str | None] = [path] if path is None or isinstance(path, str) else path
        for mount in paths:
            for mw in middleware:
                if isinstance(mw, RoutesMiddleware):
                    self._mount(mw.router, mount or "")
                else:
                    self.register(mount or "", (), (mw,), end=False)
        return self

    def _mount(self, child: "Router", mount: str) -> None:
        for layer in child.layers:
            clone = layer.clone(base=_join_mount(mount, layer.path))
            clone.strict = self.config.strict
            clone.sensitive = self.config.sensitive
            clone.set_prefix(self._prefix)
            self._add(clone)
        logger.debug("mounted %r at %r", child, mount or "/")

    def param(self, name: str, hook: ParamHandler) -> "Router":
        """Run *hook* before the handlers of every layer that declares *name*.

        Applies to layers registered before and after this call.
        """
        self._params.setdefault(name, []).append(hook)
        for layer in self._layers:
            layer.add_param_hook(name, hook)
        return self

    def prefix(self, prefix: str) -> "Router":
        """Set the path prefix for every layer, existing and future.

        The prefix replaces any previous one; it does not stack.
        """
        if prefix and not prefix.startswith("/"):
            msg = f"Router prefix must start with '/', got {prefix!r}"
            raise ConfigurationError(msg)
        self._prefix = prefix
        for layer in self._layers:
            layer.set_prefix(prefix)
            self._apply_params(layer)
        return self

    def redirect(self, source: str, destination: str, status: int = 302) -> Layer:
        """Answer *source* with a redirect to *destination*.

        Either may be a route name instead of a path; *destination* may
        also be an absolute URL, which is used verbatim.
        """
        if status not in REDIRECT_STATUSES:
            msg = f"Redirect status must be a 3xx redirect code, got {status}"
            raise ConfigurationError(msg)
        if not source.startswith("/"):
            source = self.url(source)
        if not destination.startswith("/") and not is_absolute_url(destination):
            destination = self.url(destination)

        def redirect_handler(request: Request) -> Redirect:
            return Redirect(destination, status=status)

        return self.register(source, self.config.methods, (redirect_handler,))

    # -- URL building --

    def url(
        self,
        name: str,
        params: dict[str, object] | None = None,
        query: dict[str, Any] | None = None,
    ) -> str:
        """Build the path of the route called *name*.

        Raises ``ConfigurationError`` if no route has that name.
        """
        for layer in self._layers:
            if layer.name == name:
                path = layer.url(params)
                if query:
                    path = f"{path}?{urlencode(query, doseq=True)}"
                return path
        msg = f"Could not resolve named route {name!r}"
        raise ConfigurationError(msg)

    # -- Matching --

    def match(self, path: str, method: str) -> Matched:
        """Find the layers matching *path*, and those also matching *method*."""
        by_path: list[Layer] = []
        by_method: list[Layer] = []
        for layer in self._layers:
            if layer.match(path) is None:
                continue
            by_path.append(layer)
            if layer.allows(method):
                by_method.append(layer)
        return Matched(path=tuple(by_path), path_and_method=tuple(by_method))

    def allowed_for(self, path: str) -> frozenset[str]:
        """Methods answered by route layers matching *path*."""
        allowed: set[str] = set()
        for layer in self.match(path, "").path:
            allowed.update(layer.methods)
        if "GET" in allowed:
            allowed.add("HEAD")
        return frozenset(allowed)

    # -- Middleware factories --

    def routes(self) -> "RoutesMiddleware":
        """Middleware that dispatches requests through this router."""
        return RoutesMiddleware(self)

    def allowed_methods(self, options: AllowedMethodsOptions | None = None) -> "AllowedMethodsMiddleware":
        """Middleware answering ``OPTIONS``, 405 and 501 for this router's paths."""
        return AllowedMethodsMiddleware(self, options or AllowedMethodsOptions())


def _join_mount(mount: str, path: str) -> str:
    mount = mount.rstrip("/")
    if not mount:
        return path
    if not path or path == "/":
        return mount
    return f"{mount}{path}"


class RoutesMiddleware:
    """Middleware returned by ``Router.routes()``.

    Keeps a reference to its router so a parent router can mount it
    structurally instead of treating it as opaque middleware.
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    def __repr__(self) -> str:
        return f"<RoutesMiddleware {self.router!r}>"

    async def __call__(self, request: Request, next: Next) -> Response:
        matched = self.router.match(request.path, request.method)
        if not matched.runnable:
            return await next(request)

        steps: list[tuple[dict[str, str], Handler]] = []
        for layer in matched.path_and_method:
            params = layer.match(request.path) or {}
            steps.extend((params, handler) for handler in layer.chain())

        async def dispatch(index: int, req: Request) -> Response:
            if index == len(steps):
                return await next(req)
            params, handler = steps[index]
            bound = req.with_path_params({**req.path_params, **params}) if params else req

            async def call_next(downstream: Request | None = None) -> Response:
                return await dispatch(index + 1, downstream or bound)

            return negotiate(await invoke_middleware(handler, bound, call_next))

        return await dispatch(0, request)


class AllowedMethodsMiddleware:
    """Middleware returned by ``Router.allowed_methods()``.

    Runs after downstream middleware found nothing (``NotFound``) and
    explains why: the method is outside the router's declared set (501),
    the request is ``OPTIONS`` (200 with ``Allow``), or the path exists
    for other methods only (405 with ``Allow``).
    """

    __slots__ = ("options", "router")

    def __init__(self, router: Router, options: AllowedMethodsOptions) -> None:
        self.router = router
        self.options = options

    async def __call__(self, request: Request, next: Next) -> Response:
        try:
            return await next(request)
        except NotFound:
            response = self._explain(request)
            if response is None:
                raise
            return response

    def _explain(self, request: Request) -> Response | None:
        allowed = self.router.allowed_for(request.path)
        method = request.method

        if method not in self.router.config.methods:
            return self._fail(
                MethodNotImplemented(method, allowed), self.options.not_implemented, allowed
            )
        if not allowed:
            return None
        if method == "OPTIONS":
            return Response(body="", status=200).with_header("Allow", ", ".join(sorted(allowed)))
        if method not in allowed:
            return self._fail(
                MethodNotAllowed(allowed), self.options.method_not_allowed, allowed
            )
        return None

    def _fail(
        self,
        error: HTTPError,
        factory: Any,
        allowed: frozenset[str],
    ) -> Response:
        if self.options.throw:
            raise factory() if factory is not None else error
        response = Response(body="", status=error.status)
        if allowed:
            response = response.with_header("Allow", ", ".join(sorted(allowed)))
        return response
