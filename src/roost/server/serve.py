"""Server entry point.

Starts a pounce ASGI server with a live roost Application. pounce is an
optional dependency, installed with the ``server`` extra.
"""

from roost.errors import ConfigurationError


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    workers: int = 1,
) -> None:
    """Start a pounce server with the given application.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we have a live application object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Args:
        app: ASGI callable (roost Application instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        workers: Number of worker threads. Forced to 1 when reloading.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "Serving requires the pounce server. "
            "Install it with: pip install 'roost[server]'"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
    )
    server = Server(config, app)
    server.run()
