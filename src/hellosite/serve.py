"""Putting an App on a socket with pounce.

pounce is optional (``pip install hellosite[server]``). Nothing else in
hellosite imports it, so the app and its test client work without it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hellosite.errors import ConfigurationError

if TYPE_CHECKING:
    from hellosite.app import App


def load_pounce() -> tuple[Any, Any]:
    """pounce's ``(ServerConfig, Server)``, or a ``ConfigurationError`` saying how to get them."""
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "Serving over HTTP needs the 'bengal-pounce' package. "
            "Install it with: pip install hellosite[server]"
        )
        raise ConfigurationError(msg) from None
    return ServerConfig, Server


def run_production_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 0,
    log_level: str = "info",
) -> None:
    """Serve ``app`` with a pool of pounce workers until interrupted."""
    server_config, server_cls = load_pounce()
    config = server_config(host=host, port=port, workers=workers, log_level=log_level)
    server_cls(config, app).run()


def run_dev_server(
    app: App,
    host: str,
    port: int,
    *,
    app_path: str | None = None,
    log_level: str = "info",
) -> None:
    """Serve ``app`` from one worker that restarts when source files change.

    With ``app_path`` (``"module:attribute"``) pounce re-imports the app
    after each change instead of reusing the object it was given.
    """
    server_config, server_cls = load_pounce()
    config = server_config(host=host, port=port, workers=1, reload=True, log_level=log_level)
    server_cls(config, app, app_path=app_path).run()
