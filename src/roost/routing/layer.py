"""Router layers.

A layer is one entry in a router's ordered stack: a path pattern, the
methods it answers (none for middleware layers), and the handler chain
to run when it matches.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from roost._internal.invoke import invoke_middleware
from roost._internal.types import Handler, ParamHandler
from roost.routing.path import CompiledPath, compile_path


def join_prefix(prefix: str, path: str, *, strict: bool = False) -> str:
    """Join a router prefix and a layer path.

    ``"/"`` (and the empty catch-all path) collapse into the prefix
    unless the router is strict.
    """
    prefix = prefix.rstrip("/")
    if not prefix:
        return path
    if not path or (path == "/" and not strict):
        return prefix
    return f"{prefix}{path}"


@dataclass(slots=True)
class Layer:
    """One registered route or middleware.

    Attributes:
        base: The path as registered, before the owning router's prefix.
        methods: Methods answered by a route layer; empty for middleware.
        stack: Handlers, run in order.
        name: Optional route name for ``Router.url()``.
        end: Whether the pattern must match the whole path.
    """

    base: str
    methods: frozenset[str]
    stack: tuple[Handler, ...]
    name: str | None = None
    end: bool = True
    strict: bool = False
    sensitive: bool = False
    prefix: str = ""
    param_hooks: tuple[tuple[str, ParamHandler, Handler], ...] = ()
    pattern: CompiledPath = field(init=False)

    def __post_init__(self) -> None:
        self._compile()

    def _compile(self) -> None:
        self.pattern = compile_path(
            self.path, end=self.end, strict=self.strict, sensitive=self.sensitive
        )

    @property
    def path(self) -> str:
        """The effective path, with the owning router's prefix applied."""
        return join_prefix(self.prefix, self.base, strict=self.strict)

    @property
    def is_route(self) -> bool:
        return bool(self.methods)

    def set_prefix(self, prefix: str) -> None:
        """Replace the owning router's prefix and recompile.

        Hooks for parameters the new pattern no longer declares are dropped.
        """
        self.prefix = prefix
        self._compile()
        keys = self.pattern.keys
        self.param_hooks = tuple(item for item in self.param_hooks if item[0] in keys)

    def match(self, path: str) -> dict[str, str] | None:
        return self.pattern.match(path)

    def allows(self, method: str) -> bool:
        """Whether this layer runs for *method* (``GET`` routes answer ``HEAD`` too)."""
        if not self.methods:
            return True
        return method in self.methods or (method == "HEAD" and "GET" in self.methods)

    def add_param_hook(self, name: str, hook: ParamHandler) -> None:
        """Attach *hook* if this layer declares the parameter *name*."""
        if name not in self.pattern.keys:
            return
        if any(n == name and h is hook for n, h, _ in self.param_hooks):
            return
        self.param_hooks = (*self.param_hooks, (name, hook, _bind_param_hook(name, hook)))

    def chain(self) -> tuple[Handler, ...]:
        """Param hooks (in parameter order) followed by the layer's handlers."""
        order = {key: i for i, key in enumerate(self.pattern.keys)}
        hooks = sorted(self.param_hooks, key=lambda item: order[item[0]])
        return (*(bound for _, _, bound in hooks), *self.stack)

    def clone(self, base: str | None = None) -> "Layer":
        """Copy this layer, optionally re-rooted at a new *base* path."""
        return Layer(
            base=self.path if base is None else base,
            methods=self.methods,
            stack=self.stack,
            name=self.name,
            end=self.end,
            strict=self.strict,
            sensitive=self.sensitive,
            param_hooks=self.param_hooks,
        )

    def url(self, params: dict[str, object] | None = None) -> str:
        return self.pattern.build(params)


def _bind_param_hook(name: str, hook: ParamHandler) -> Callable[..., Any]:
    """Adapt a ``(value, request, next)`` hook to the middleware shape."""

    async def param_middleware(request: Any, next: Any) -> Any:
        return await invoke_middleware(hook, request.path_params.get(name), request, next)

    param_middleware.__name__ = getattr(hook, "__name__", "param_middleware")
    return param_middleware


@dataclass(frozen=True, slots=True)
class Matched:
    """Result of matching a request against a router's layers.

    ``path`` holds every layer whose pattern matched; ``path_and_method``
    the subset that also answers the request method, in stack order.
    """

    path: tuple[Layer, ...]
    path_and_method: tuple[Layer, ...]

    @property
    def route(self) -> bool:
        """True if at least one route layer answers the path and method."""
        return any(layer.is_route for layer in self.path_and_method)

    @property
    def runnable(self) -> bool:
        """True if any layer, route or middleware, should run."""
        return bool(self.path_and_method)
