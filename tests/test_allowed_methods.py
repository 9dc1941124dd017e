"""Tests for allowed_methods() — OPTIONS, 405 and 501 answers."""

import pytest

from roost.app import Application
from roost.components import allowed_methods, routes
from roost.config import AllowedMethodsOptions, RouterOptions
from roost.errors import MethodNotAllowed, MethodNotImplemented, NotFound
from roost.hooks import get, patch, put
from roost.routing.router import Router
from roost.testing import TestClient, make_request


async def _passthrough(request, next):
    return await next()


async def _not_found(request):
    raise NotFound()


def _foo_component():
    put("/foo", _passthrough)
    patch("/foo", _passthrough)


def _app(component, options=None, router_options=None) -> Application:
    return Application().use(
        allowed_methods(component, options, router_options=router_options),
        routes(component, router_options),
    )


class TestResponses:
    async def test_options_lists_allowed_methods(self) -> None:
        async with TestClient(_app(_foo_component)) as client:
            response = await client.options("/foo")
        assert response.status == 200
        assert response.header("Allow") == "PATCH, PUT"

    async def test_method_not_allowed(self) -> None:
        def component():
            get("/foo", _passthrough)

        async with TestClient(_app(component)) as client:
            response = await client.put("/foo")
        assert response.status == 405
        assert response.header("Allow") == "GET, HEAD"

    async def test_not_implemented(self) -> None:
        def component():
            get("/foo", _passthrough)

        router_options = RouterOptions(methods=frozenset({"GET"}))
        async with TestClient(_app(component, router_options=router_options)) as client:
            response = await client.patch("/foo")
        assert response.status == 501
        assert response.header("Allow") == "GET, HEAD"

    async def test_unknown_path_stays_not_found(self) -> None:
        async with TestClient(_app(_foo_component)) as client:
            response = await client.put("/bar")
        assert response.status == 404

    async def test_matched_route_untouched(self) -> None:
        def component():
            get("/foo", lambda request: "hello")

        async with TestClient(_app(component)) as client:
            response = await client.get("/foo")
        assert response.status == 200
        assert response.text == "hello"

    async def test_allowed_method_that_falls_through_stays_not_found(self) -> None:
        async with TestClient(_app(_foo_component)) as client:
            response = await client.put("/foo")
        assert response.status == 404


class TestThrow:
    async def test_throws_method_not_allowed(self) -> None:
        router = Router()
        router.get("/foo", _passthrough)
        mw = router.allowed_methods(AllowedMethodsOptions(throw=True))

        with pytest.raises(MethodNotAllowed) as exc_info:
            await mw(make_request("/foo", "PUT"), _not_found)
        assert exc_info.value.status == 405
        assert ("Allow", "GET, HEAD") in exc_info.value.headers

    async def test_throws_not_implemented(self) -> None:
        router = Router(RouterOptions(methods=frozenset({"GET"})))
        router.get("/foo", _passthrough)
        mw = router.allowed_methods(AllowedMethodsOptions(throw=True))

        with pytest.raises(MethodNotImplemented) as exc_info:
            await mw(make_request("/foo", "PATCH"), _not_found)
        assert exc_info.value.status == 501

    async def test_custom_factories(self) -> None:
        class Teapot(Exception):
            pass

        router = Router()
        router.get("/foo", _passthrough)
        mw = router.allowed_methods(
            AllowedMethodsOptions(throw=True, method_not_allowed=Teapot)
        )

        with pytest.raises(Teapot):
            await mw(make_request("/foo", "PUT"), _not_found)

    async def test_thrown_error_becomes_response_in_app(self) -> None:
        def component():
            get("/foo", _passthrough)

        app = _app(component, AllowedMethodsOptions(throw=True))
        async with TestClient(app) as client:
            response = await client.put("/foo")
        assert response.status == 405
        assert response.header("Allow") == "GET, HEAD"

    async def test_other_errors_propagate(self) -> None:
        async def boom(request):
            raise RuntimeError("boom")

        mw = Router().allowed_methods()
        with pytest.raises(RuntimeError):
            await mw(make_request("/foo"), boom)
