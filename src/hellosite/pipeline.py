"""One HTTP request, from ASGI scope to ASGI messages.

Middleware wraps route dispatch; the first one added sees the request
first. Whatever escapes the chain becomes a response here: an
``HTTPError`` by its status, anything else as a logged 500.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from hellosite.errors import HTTPError
from hellosite.http import Request, Response
from hellosite.routing import Router

logger = logging.getLogger("hellosite.server")

type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Anything awaitable as ``mw(request, next)`` that returns a Response.

    Plain ``async def`` functions qualify; so do objects with an async
    ``__call__``, like ``StaticFiles``.
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


def _dispatcher(router: Router) -> Next:
    async def dispatch(request: Request) -> Response:
        route = router.match(request.method, request.path)
        result = route.handler()
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Response):
            return result
        if isinstance(result, str):
            return Response.plain(result)
        name = getattr(route.handler, "__name__", repr(route.handler))
        msg = f"Handler {name} returned {type(result).__name__}; return a str or a Response."
        raise TypeError(msg)

    return dispatch


def _wrap(middleware: Middleware, inner: Next) -> Next:
    async def call(request: Request) -> Response:
        return await middleware(request, inner)

    return call


def error_response(exc: HTTPError) -> Response:
    """The default page for an ``HTTPError``: its reason phrase."""
    return Response(exc.reason.encode("utf-8"), exc.status, headers=exc.headers)


async def handle_request(
    scope: dict[str, Any],
    send: Callable[[dict[str, Any]], Awaitable[None]],
    *,
    router: Router,
    middleware: Sequence[Middleware],
) -> None:
    request = Request.from_scope(scope)
    handler = _dispatcher(router)
    for mw in reversed(middleware):
        handler = _wrap(mw, handler)

    try:
        response = await handler(request)
    except HTTPError as exc:
        logger.debug("%d %s %s %s", exc.status, request.method, request.path, exc.detail)
        response = error_response(exc)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = Response.plain("Internal Server Error", 500)

    await send_response(send, response, head=request.method == "HEAD")


def _has_body(status: int) -> bool:
    return not (100 <= status < 200 or status in (204, 304))


async def send_response(
    send: Callable[[dict[str, Any]], Awaitable[None]],
    response: Response,
    *,
    head: bool = False,
) -> None:
    """Emit ``response`` as ``http.response.start`` plus one body message.

    ``Content-Length`` always reflects the body a ``GET`` would carry,
    even when ``head`` drops the bytes themselves.
    """
    body = response.body if _has_body(response.status) else b""
    headers = [
        (b"content-type", response.content_type.encode("latin-1")),
        (b"content-length", str(len(body)).encode("latin-1")),
    ]
    headers += [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() not in ("content-type", "content-length")
    ]
    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
