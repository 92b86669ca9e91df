"""In-process client for exercising an App without a socket.

Requests go straight into the ASGI callable, so tests see exactly the
``Response`` the server would send, rebuilt from the ASGI messages.
"""

from __future__ import annotations

from typing import Any

from hellosite.app import App
from hellosite.http import TEXT_PLAIN, Response


class TestClient:
    """Async client for a hellosite App.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/hello")
            assert response.text == "Hello, From hello route!"
    """

    __test__ = False  # not a pytest test class

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        await self._lifespan()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def get(self, path: str) -> Response:
        return await self.request("GET", path)

    async def head(self, path: str) -> Response:
        return await self.request("HEAD", path)

    async def post(self, path: str) -> Response:
        return await self.request("POST", path)

    async def request(self, method: str, path: str) -> Response:
        """Send one request; a ``?query`` suffix is split off as ASGI does."""
        path, _, query = path.partition("?")
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": query.encode("latin-1"),
            "headers": [(b"host", b"testserver")],
        }
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await self.app(scope, receive, send)

        start, body = sent
        content_type = TEXT_PLAIN
        headers: list[tuple[str, str]] = []
        for raw_name, raw_value in start["headers"]:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            else:
                headers.append((name, value))
        return Response(body["body"], start["status"], content_type, tuple(headers))

    async def _lifespan(self) -> None:
        """Run ASGI startup so setup errors surface here, as under a server."""
        inbox = [{"type": "lifespan.startup"}]
        replies: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return inbox.pop(0) if inbox else {"type": "lifespan.shutdown"}

        async def send(message: dict[str, Any]) -> None:
            replies.append(message)

        await self.app({"type": "lifespan"}, receive, send)
        if replies[0]["type"] == "lifespan.startup.failed":
            raise RuntimeError(replies[0]["message"])
