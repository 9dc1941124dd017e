"""``roost run`` — serve a component.

Resolves an import string to a component, materializes it into an
application and starts the pounce server.
"""

import argparse
import sys

from roost.cli._resolve import resolve_component
from roost.components import listen
from roost.config import AppConfig
from roost.errors import RoostError


def run_component(args: argparse.Namespace) -> None:
    """Serve ``args.component``; CLI flags override ``AppConfig`` defaults."""
    try:
        component = resolve_component(args.component)
        config = AppConfig(
            debug=args.debug,
            reload=args.reload,
            workers=args.workers,
        )
        listen(component, config, host=args.host, port=args.port)
    except (ModuleNotFoundError, AttributeError, TypeError, RoostError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
