"""Invoke helpers — call sync or async handlers uniformly.

Roost handlers can be ``def`` or ``async def``, and may or may not
accept the ``next`` callable. Any code that calls a user-provided
handler goes through this module so those checks live in one place.

Usage::

    from roost._internal.invoke import invoke, invoke_middleware

    result = await invoke(handler, *args)
    result = await invoke_middleware(handler, request, next)
"""

import inspect
from functools import lru_cache
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


@lru_cache(maxsize=1024)
def _positional_arity(handler: Any) -> int | None:
    """Number of positional parameters *handler* accepts, ``None`` if unbounded."""
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def _arity(handler: Any) -> int | None:
    try:
        return _positional_arity(handler)
    except TypeError:
        # Unhashable callable objects skip the cache
        return _positional_arity.__wrapped__(handler)


async def invoke_middleware(handler: Any, *args: Any) -> Any:
    """Call a middleware-shaped handler with as many leading *args* as it accepts.

    Route handlers may be written as ``(request, next)`` or ``(request)``;
    parameter hooks as ``(value, request, next)`` or a shorter prefix of it.
    """
    arity = _arity(handler)
    if arity is not None:
        args = args[:arity]
    return await invoke(handler, *args)
