"""Static fallback: files from a directory for paths no route owns.

The router always answers first. Its ``NotFound`` is the only thing that
sends a request to disk, and a path that leaves the directory, or that
the filesystem refuses to look up, stays a ``NotFound``.
"""

import logging
import mimetypes
from pathlib import Path

import anyio
import anyio.to_thread

from hellosite.errors import NotFound
from hellosite.http import Request, Response
from hellosite.pipeline import Next

logger = logging.getLogger("hellosite.static")

OCTET_STREAM = "application/octet-stream"


class StaticFiles:
    """Middleware serving ``GET``/``HEAD`` misses under ``prefix`` from ``root``.

    A directory serves its ``index`` file. Files are read on every
    request; the only caching is the ``Cache-Control`` header.

    Usage::

        app.add_middleware(StaticFiles("./public"))
        app.add_middleware(StaticFiles("./assets", "/assets", cache_control="no-cache"))
    """

    __slots__ = ("cache_control", "index", "prefix", "root")

    def __init__(
        self,
        root: str | Path,
        prefix: str = "/",
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self.root = Path(root).resolve()
        self.prefix = "/" + prefix.strip("/")
        self.index = index
        self.cache_control = cache_control

    async def __call__(self, request: Request, next: Next) -> Response:
        try:
            return await next(request)
        except NotFound:
            relative = self.relative_path(request)
            if relative is None:
                raise
            found = await anyio.to_thread.run_sync(self.locate, relative)
            if found is None:
                raise
        return await self.serve(found)

    def relative_path(self, request: Request) -> str | None:
        """The part of the path below ``prefix``; ``None`` if not ours."""
        if request.method not in ("GET", "HEAD"):
            return None
        path = request.path
        if self.prefix == "/":
            return path.lstrip("/")
        if path == self.prefix or path.startswith(self.prefix + "/"):
            return path[len(self.prefix) :].lstrip("/")
        return None

    def locate(self, relative: str) -> Path | None:
        """The file ``relative`` names inside ``root``, or ``None``.

        Blocking; called in a worker thread. Lookups that fail outright
        (a component longer than the filesystem allows, an embedded NUL,
        a symlink loop) find nothing.
        """
        try:
            candidate = (self.root / relative).resolve()
            if not candidate.is_relative_to(self.root):
                logger.debug("Refused %r: resolves outside %s", relative, self.root)
                return None
            if candidate.is_dir():
                candidate = candidate / self.index
            return candidate if candidate.is_file() else None
        except (OSError, ValueError, RuntimeError):
            return None

    async def serve(self, path: Path) -> Response:
        """Read ``path`` off the event loop. ``OSError`` propagates as a 500."""
        body = await anyio.Path(path).read_bytes()
        content_type = mimetypes.guess_type(path.name)[0] or OCTET_STREAM
        return Response(body, content_type=content_type).with_header(
            "Cache-Control", self.cache_control
        )
