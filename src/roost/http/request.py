"""Immutable HTTP request.

Frozen metadata with async body access. Routers hand each layer a copy
with that layer's ``path_params`` bound; everything else, including the
mutable ``state`` namespace, is shared along the middleware chain.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import Any

from roost._internal.asgi import Receive
from roost.http.headers import Headers
from roost.http.query import QueryParams


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, etc.) is frozen at creation.
    Body is accessed asynchronously via ``.body()``, ``.text()``, ``.json()``.

    ``state`` is a plain dict shared by every copy of the request made
    while it travels through the pipeline. Middleware may use it to pass
    data downstream.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    state: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Private: mutable cache for the body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    def with_path_params(self, params: dict[str, str]) -> Request:
        """Return a copy with *params* bound as the path parameters."""
        return replace(self, path_params=params)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON."""
        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
