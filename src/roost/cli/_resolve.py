"""Component import resolution — resolves ``"module:attribute"`` strings.

Shared by ``roost routes`` and ``roost run``.
"""

import importlib

from roost._internal.types import Component


def resolve_component(import_string: str) -> Component:
    """Resolve an import string to a component function.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"app"`` (``"myapp"`` resolves to ``myapp.app``).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not callable.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if not callable(obj):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a component function"
        raise TypeError(msg)
    return obj
