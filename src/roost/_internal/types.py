"""Shared type aliases used across roost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler or middleware: ``(request, next)`` or ``(request)``, sync or async
Handler: TypeAlias = Callable[..., Any]

# Parameter hook: ``(value, request, next)``
ParamHandler: TypeAlias = Callable[..., Any]

# Component: zero-argument function that records directives
Component: TypeAlias = Callable[[], object]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
