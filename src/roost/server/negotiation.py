"""Content negotiation — maps return values to Response objects.

Inspects the return value from a handler or middleware and produces the
appropriate Response. isinstance-based dispatch, no magic, fully
predictable.
"""

import json as json_module
from typing import Any

from roost.errors import ConfigurationError
from roost.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:
    1. ``Response`` -> pass through
    2. ``Redirect`` -> empty body with ``Location``
    3. ``None`` -> ``204 No Content``
    4. ``str`` -> ``text/html``
    5. ``bytes`` -> ``application/octet-stream``
    6. ``dict`` / ``list`` -> JSON
    7. ``(value, status)`` tuple -> negotiated value with that status
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, Redirect):
        response = Response(status=value.status).with_header("Location", value.url)
        for name, header_value in value.headers:
            response = response.with_header(name, header_value)
        return response
    if value is None:
        return Response(status=204)
    if isinstance(value, str):
        return Response(body=value)
    if isinstance(value, bytes):
        return Response(body=value, content_type="application/octet-stream")
    if isinstance(value, dict | list):
        return Response(
            body=json_module.dumps(value, default=str),
            content_type="application/json",
        )
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], int):
        body, status = value
        return negotiate(body).with_status(status)

    msg = (
        f"Cannot convert {type(value).__name__} to a response. Return a Response, "
        "Redirect, str, bytes, dict, list, None, or a (value, status) tuple."
    )
    raise ConfigurationError(msg)
