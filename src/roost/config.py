"""Application and router configuration.

Frozen dataclasses validated on construction. Routers keep theirs as
``Router.config``; applications as ``Application.config``.
"""

from collections.abc import Callable
from dataclasses import dataclass

from roost.errors import ConfigurationError

# Methods a router handles unless told otherwise. ``all_()`` expands to this set.
DEFAULT_METHODS: frozenset[str] = frozenset(
    {"DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT"}
)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    reload: bool = False
    workers: int = 1
    log_level: str = "info"

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if self.workers < 1:
            msg = f"workers must be at least 1, got {self.workers}"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class RouterOptions:
    """Options for a ``Router``.

    Attributes:
        prefix: Path prefix applied to every layer of the router.
        strict: When True, ``/foo`` and ``/foo/`` are different paths.
        sensitive: When True, path matching is case-sensitive.
        methods: The methods this router handles. Requests for other
            methods are answered with 501 by ``allowed_methods()``.
    """

    prefix: str = ""
    strict: bool = False
    sensitive: bool = False
    methods: frozenset[str] = DEFAULT_METHODS

    def __post_init__(self) -> None:
        if self.prefix and not self.prefix.startswith("/"):
            msg = f"Router prefix must start with '/', got {self.prefix!r}"
            raise ConfigurationError(msg)
        if not self.methods:
            msg = "Router must declare at least one method"
            raise ConfigurationError(msg)
        object.__setattr__(self, "methods", frozenset(m.upper() for m in self.methods))


@dataclass(frozen=True, slots=True)
class AllowedMethodsOptions:
    """Options for ``Router.allowed_methods()``.

    By default a "not allowed" request is answered with ``405`` and a
    "not implemented" one with ``501``. With ``throw=True`` the
    middleware raises instead; ``not_implemented`` and
    ``method_not_allowed`` factories then supply the exception to raise.
    """

    throw: bool = False
    not_implemented: Callable[[], Exception] | None = None
    method_not_allowed: Callable[[], Exception] | None = None
