"""Tests for roost._internal.invoke — uniform handler calls."""

import functools

from roost._internal.invoke import invoke, invoke_middleware


class TestInvoke:
    async def test_sync(self) -> None:
        assert await invoke(lambda x: x + 1, 1) == 2

    async def test_async(self) -> None:
        async def double(x):
            return x * 2

        assert await invoke(double, 2) == 4

    async def test_sync_returning_awaitable(self) -> None:
        async def inner():
            return "inner"

        assert await invoke(lambda: inner()) == "inner"


class TestInvokeMiddleware:
    async def test_trims_to_arity(self) -> None:
        assert await invoke_middleware(lambda request: request, "req", "next") == "req"

    async def test_full_arity(self) -> None:
        assert await invoke_middleware(lambda a, b, c: (a, b, c), 1, 2, 3) == (1, 2, 3)

    async def test_varargs_get_everything(self) -> None:
        assert await invoke_middleware(lambda *args: args, 1, 2) == (1, 2)

    async def test_callable_object(self) -> None:
        class Handler:
            def __call__(self, request, next):
                return (request, next)

        assert await invoke_middleware(Handler(), "req", "next") == ("req", "next")

    async def test_partial(self) -> None:
        def handler(prefix, request):
            return prefix + request

        assert await invoke_middleware(functools.partial(handler, "x-"), "req", "next") == "x-req"

    async def test_unhashable_callable(self) -> None:
        class Unhashable:
            __hash__ = None  # type: ignore[assignment]

            def __call__(self, request):
                return request

        assert await invoke_middleware(Unhashable(), "req", "next") == "req"
