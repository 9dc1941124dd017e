"""Component frames and the recorder that fills them.

While a component runs, the directives it records go into a *frame*.
Frames form a stack held in a ``ContextVar``: materializing a component
pushes a frame, and any recorder call made before that component
returns, however deep in the call chain, lands in the innermost frame.
Nested materializations push and pop their own frames, so a child
component's directives never reach its parent.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads, so materializations running in different tasks or threads
    each see their own stack. No locks needed.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar

from roost._internal.types import Handler, ParamHandler
from roost.directives import (
    ALL,
    Directive,
    Param,
    Prefix,
    Redirect,
    Use,
    Verb,
    normalize_paths,
)
from roost.errors import ComponentError, DirectiveError, NoActiveComponent

logger = logging.getLogger("roost.components")


class Frame:
    """The ordered directives recorded during one component invocation.

    Owned by the materializer that opened it. Sealed when the component
    returns; a sealed frame rejects further directives.
    """

    __slots__ = ("_directives", "_sealed", "label")

    def __init__(self, label: str | None = None) -> None:
        self.label = label
        self._directives: list[Directive] = []
        self._sealed = False

    def append(self, directive: Directive) -> None:
        if self._sealed:
            msg = (
                f"Component {self.label or '<anonymous>'} has already returned; "
                "directives must be recorded while the component runs"
            )
            raise ComponentError(msg)
        self._directives.append(directive)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def directives(self) -> tuple[Directive, ...]:
        return tuple(self._directives)

    def __iter__(self) -> Iterator[Directive]:
        return iter(self.directives)

    def __len__(self) -> int:
        return len(self._directives)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"<Frame {self.label or '<anonymous>'} {state} directives={len(self)}>"


_frames: ContextVar[tuple[Frame, ...]] = ContextVar("roost_frames", default=())


def depth() -> int:
    """Number of component frames currently open in this context."""
    return len(_frames.get())


@contextmanager
def open_frame(label: str | None = None) -> Iterator["Recorder"]:
    """Push a new frame for the duration of the ``with`` block.

    Yields a ``Recorder`` bound to the frame. The frame is popped and
    sealed on every exit path, including exceptions, so a failing
    component never leaves a stale frame behind.
    """
    frame = Frame(label)
    token = _frames.set((*_frames.get(), frame))
    logger.debug("opened frame %s at depth %d", label or "<anonymous>", depth())
    try:
        yield Recorder(frame)
    finally:
        _frames.reset(token)
        frame.seal()
        logger.debug(
            "closed frame %s with %d directive(s), depth now %d",
            label or "<anonymous>",
            len(frame),
            depth(),
        )


def current_recorder(caller: str = "current_recorder") -> "Recorder":
    """Return a recorder for the innermost open frame.

    Raises ``NoActiveComponent`` when no component is being materialized.
    """
    frames = _frames.get()
    if not frames:
        raise NoActiveComponent(caller)
    return Recorder(frames[-1])


def _split_route_args(
    kind: str,
    first: str,
    rest: tuple[object, ...],
    name: str | None,
) -> tuple[str | None, str, tuple[Handler, ...]]:
    """Accept both ``(path, *handlers)`` and ``(name, path, *handlers)``."""
    if rest and isinstance(rest[0], str):
        if name is not None:
            msg = f"{kind}() got a route name both positionally and as name="
            raise DirectiveError(msg)
        return first, rest[0], rest[1:]
    return name, first, rest


class Recorder:
    """Builder that records directives into one frame.

    The module-level functions in ``roost.hooks`` delegate to the
    recorder of the innermost frame; a component may also hold one
    explicitly::

        def api():
            r = current_recorder()
            r.prefix("/api")
            r.get("/health", health)
    """

    __slots__ = ("frame",)

    def __init__(self, frame: Frame) -> None:
        self.frame = frame

    def __repr__(self) -> str:
        return f"<Recorder {self.frame!r}>"

    def record(self, directive: Directive) -> None:
        self.frame.append(directive)

    # -- Verbs --

    def verb(
        self,
        methods: Sequence[str],
        path: str,
        *handlers: Handler,
        name: str | None = None,
    ) -> Verb:
        """Record a route answering *methods* at *path*."""
        directive = Verb(
            methods=frozenset(m.upper() for m in methods),
            path=path,
            handlers=tuple(handlers),
            name=name,
        )
        self.record(directive)
        return directive

    def _route(self, kind: str, method: str, first: str, rest: tuple, name: str | None) -> Verb:
        route_name, path, handlers = _split_route_args(kind, first, rest, name)
        return self.verb((method,), path, *handlers, name=route_name)

    def all_(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("all_", ALL, path, handlers, name)

    def get(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("get", "GET", path, handlers, name)

    def post(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("post", "POST", path, handlers, name)

    def put(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("put", "PUT", path, handlers, name)

    def patch(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("patch", "PATCH", path, handlers, name)

    def delete(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("delete", "DELETE", path, handlers, name)

    def head(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("head", "HEAD", path, handlers, name)

    def options(self, path: str, *handlers: Handler | str, name: str | None = None) -> Verb:
        return self._route("options", "OPTIONS", path, handlers, name)

    # -- Everything else --

    def use(self, *middleware: object, path: str | Sequence[str] | None = None) -> Use:
        """Record middleware, optionally scoped to a path or paths.

        The path may be given as the first positional argument
        (``use("/api", routes(api))``) or as ``path=``.
        """
        if middleware and isinstance(middleware[0], str | list | tuple):
            if path is not None:
                msg = "use() got a path both positionally and as path="
                raise DirectiveError(msg)
            path, middleware = middleware[0], middleware[1:]
        directive = Use(handlers=tuple(middleware), path=normalize_paths(path))
        self.record(directive)
        return directive

    def param(self, name: str, handler: ParamHandler) -> Param:
        directive = Param(name=name, handler=handler)
        self.record(directive)
        return directive

    def prefix(self, path: str) -> Prefix:
        directive = Prefix(path=path)
        self.record(directive)
        return directive

    def redirect(self, source: str, destination: str, status: int = 302) -> Redirect:
        directive = Redirect(source=source, destination=destination, status=status)
        self.record(directive)
        return directive
