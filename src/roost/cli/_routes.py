"""``roost routes`` — list the layers a component materializes to.

Prints METHOD, PATH and NAME for every layer in dispatch order.
Middleware layers show ``*`` as their method.
"""

import argparse
import sys

from roost.cli._resolve import resolve_component
from roost.components import routerify
from roost.errors import RoostError


def run_routes(args: argparse.Namespace) -> None:
    """Materialize ``args.component`` into a router and print its layers."""
    try:
        component = resolve_component(args.component)
        router = routerify(component)
    except (ModuleNotFoundError, AttributeError, TypeError, RoostError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    layers = router.layers
    if not layers:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for layer in layers:
        methods = ", ".join(sorted(layer.methods)) or "*"
        rows.append((methods, layer.path or "/", layer.name or ""))

    max_methods = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "NAME").rstrip())
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods, path, name in rows:
        print(fmt.format(methods, path, name).rstrip())
