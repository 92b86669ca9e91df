"""The App: routes and middleware gathered at import time, sealed on first use.

Sealing happens once, under a lock, on whichever comes first: the ASGI
lifespan startup, the first request, ``app.routes`` or ``app.run()``.
After that the app only reads its own state, so any number of requests
can share it.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from hellosite.config import AppConfig
from hellosite.errors import ConfigurationError
from hellosite.pipeline import Middleware, handle_request
from hellosite.routing import Handler, Route, Router
from hellosite.static import StaticFiles

logger = logging.getLogger("hellosite.app")


class App:
    """An ASGI application built from literal routes and a static fallback.

    Usage::

        app = App()

        @app.route("/")
        def index():
            return "Hello, World!"

        app.run()
    """

    __slots__ = ("_chain", "_lock", "_middleware", "_pending", "_router", "config")

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self._pending: list[Route] = []
        self._middleware: list[Middleware] = []
        self._lock = threading.Lock()
        # Set once by _seal()
        self._router: Router | None = None
        self._chain: tuple[Middleware, ...] = ()

    def route(
        self, path: str, *, methods: Iterable[str] = ("GET",)
    ) -> Callable[[Handler], Handler]:
        """Register the decorated function for ``path``.

        The handler takes no arguments and returns a ``str`` (sent as
        ``text/plain``) or a ``Response``. Clashing routes are reported
        when the app seals.
        """

        def register(handler: Handler) -> Handler:
            self._check_open()
            self._pending.append(Route(path, handler, frozenset(m.upper() for m in methods)))
            return handler

        return register

    def add_middleware(self, middleware: Middleware) -> None:
        self._check_open()
        self._middleware.append(middleware)

    @property
    def routes(self) -> list[Route]:
        return self._seal().routes

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve until interrupted: pounce's reloader when ``config.debug``, else its workers."""
        self._seal()
        host = host or self.config.host
        port = port or self.config.port
        logger.info("Server is running on http://%s:%d", host, port)

        if self.config.debug:
            from hellosite.serve import run_dev_server

            run_dev_server(self, host, port, log_level=self.config.log_level)
        else:
            from hellosite.serve import run_production_server

            run_production_server(
                self, host, port, workers=self.config.workers, log_level=self.config.log_level
            )

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """ASGI 3.0 entry point. Scope types other than lifespan and http are ignored."""
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
        elif scope["type"] == "http":
            router = self._seal()
            await handle_request(scope, send, router=router, middleware=self._chain)

    async def _lifespan(self, receive: Any, send: Any) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._seal()
                except ConfigurationError as exc:
                    logger.exception("App failed to start")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _seal(self) -> Router:
        if self._router is not None:
            return self._router
        with self._lock:
            if self._router is None:
                router = Router(self._pending)
                router.seal()
                chain = list(self._middleware)
                static = self._static_files()
                if static is not None:
                    chain.append(static)
                self._chain = tuple(chain)
                self._router = router
        return self._router

    def _static_files(self) -> StaticFiles | None:
        """The config-driven fallback, innermost so it only sees route misses."""
        if self.config.static_dir is None:
            return None
        root = Path(self.config.static_dir)
        if not root.is_dir():
            logger.debug("No static directory at %s; serving routes only", root)
            return None
        return StaticFiles(
            root,
            self.config.static_url,
            index=self.config.static_index,
            cache_control=self.config.static_cache_control,
        )

    def _check_open(self) -> None:
        if self._router is not None:
            msg = (
                "App is already serving; register routes and middleware "
                "before the first request."
            )
            raise RuntimeError(msg)
