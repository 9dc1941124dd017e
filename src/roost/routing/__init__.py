"""Routing — an ordered stack of route and middleware layers.

Layers are registered during setup (usually by replaying a component's
directives) and matched in registration order at request time.
"""

from roost.routing.layer import Layer, Matched
from roost.routing.path import CompiledPath, compile_path
from roost.routing.router import (
    AllowedMethodsMiddleware,
    Router,
    RoutesMiddleware,
)

__all__ = [
    "AllowedMethodsMiddleware",
    "CompiledPath",
    "Layer",
    "Matched",
    "Router",
    "RoutesMiddleware",
    "compile_path",
]
