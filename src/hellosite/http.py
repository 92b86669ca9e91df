"""Request and Response, the two values passed along the middleware chain."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

TEXT_PLAIN = "text/plain; charset=utf-8"

Headers = tuple[tuple[str, str], ...]


def _find(headers: Headers, name: str, default: str | None) -> str | None:
    wanted = name.lower()
    return next((value for key, value in headers if key.lower() == wanted), default)


@dataclass(frozen=True, slots=True)
class Request:
    """What dispatch looks at: the method and the path.

    Header names are lowercased on the way in. The body is never read,
    because routes and static files are addressed by method and path.
    """

    method: str
    path: str
    headers: Headers = ()

    def header(self, name: str, default: str | None = None) -> str | None:
        return _find(self.headers, name, default)

    @classmethod
    def from_scope(cls, scope: dict[str, Any]) -> Request:
        """Read an ASGI ``http`` scope."""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=tuple(
                (name.decode("latin-1").lower(), value.decode("latin-1"))
                for name, value in scope.get("headers", ())
            ),
        )


@dataclass(frozen=True, slots=True)
class Response:
    """Status, body bytes and headers, ready for the wire.

    ``Content-Type`` has its own field; everything else lives in
    ``headers``. ``Content-Length`` is always computed when sending.
    """

    body: bytes = b""
    status: int = 200
    content_type: str = TEXT_PLAIN
    headers: Headers = ()

    @classmethod
    def plain(cls, text: str, status: int = 200) -> Response:
        """A UTF-8 ``text/plain`` response."""
        return cls(text.encode("utf-8"), status)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str, default: str | None = None) -> str | None:
        return _find(self.headers, name, default)
