"""Directive values recorded by components.

A directive is one declarative intent captured while a component runs:
a route for some verbs, a piece of middleware, a parameter hook, a
prefix, or a redirect. Directives are frozen and validate their shape
on construction, so a malformed call fails where it was written rather
than when a request arrives.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from roost._internal.types import Handler, ParamHandler
from roost.errors import DirectiveError
from roost.routing.router import REDIRECT_STATUSES

# Method marker for ``all_()``; expanded to the router's declared methods on replay
ALL = "ALL"


def _require_handlers(kind: str, handlers: tuple[Handler, ...]) -> None:
    if not handlers:
        msg = f"{kind} directive needs at least one handler"
        raise DirectiveError(msg)
    for handler in handlers:
        if not callable(handler):
            msg = f"{kind} directive handlers must be callable, got {type(handler).__name__}"
            raise DirectiveError(msg)


@dataclass(frozen=True, slots=True)
class Verb:
    """Register ``handlers`` for ``methods`` at ``path``."""

    methods: frozenset[str]
    path: str
    handlers: tuple[Handler, ...]
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.methods:
            msg = f"Route {self.path!r} needs at least one method"
            raise DirectiveError(msg)
        if not isinstance(self.path, str):
            msg = f"Route path must be a string, got {type(self.path).__name__}"
            raise DirectiveError(msg)
        _require_handlers("Route", self.handlers)


@dataclass(frozen=True, slots=True)
class Use:
    """Mount middleware, scoped to ``path`` when one is given.

    ``path=None`` means every path passing through the component.
    """

    handlers: tuple[Handler, ...]
    path: str | tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        _require_handlers("Use", self.handlers)
        if isinstance(self.path, tuple) and not self.path:
            msg = "use() was given an empty list of paths"
            raise DirectiveError(msg)


@dataclass(frozen=True, slots=True)
class Param:
    """Run ``handler`` whenever a route declaring parameter ``name`` matches."""

    name: str
    handler: ParamHandler

    def __post_init__(self) -> None:
        if not self.name:
            msg = "param() needs a parameter name"
            raise DirectiveError(msg)
        if not callable(self.handler):
            msg = f"param({self.name!r}) handler must be callable"
            raise DirectiveError(msg)


@dataclass(frozen=True, slots=True)
class Prefix:
    """Set the path prefix of the component's router."""

    path: str

    def __post_init__(self) -> None:
        if self.path and not self.path.startswith("/"):
            msg = f"prefix() must start with '/', got {self.path!r}"
            raise DirectiveError(msg)


@dataclass(frozen=True, slots=True)
class Redirect:
    """Answer ``source`` with a redirect to ``destination``."""

    source: str
    destination: str
    status: int = 302

    def __post_init__(self) -> None:
        if self.status not in REDIRECT_STATUSES:
            msg = f"redirect() status must be a 3xx redirect code, got {self.status}"
            raise DirectiveError(msg)


type Directive = Verb | Use | Param | Prefix | Redirect


def normalize_paths(path: str | Sequence[str] | None) -> str | tuple[str, ...] | None:
    """Freeze a ``use()`` path argument into a hashable value."""
    if path is None or isinstance(path, str):
        return path
    return tuple(path)
