"""Tests for hellosite.pipeline: error pages and the ASGI response messages."""

from typing import Any

from hellosite.errors import HTTPError, MethodNotAllowed, NotFound
from hellosite.http import Response
from hellosite.pipeline import error_response, send_response


async def _sent(response: Response, *, head: bool = False) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(send, response, head=head)
    return messages


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        start, body = await _sent(Response.plain("Hello, World!"))

        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        assert start["headers"][:2] == [
            (b"content-type", b"text/plain; charset=utf-8"),
            (b"content-length", b"13"),
        ]
        assert body == {"type": "http.response.body", "body": b"Hello, World!"}

    async def test_extra_headers_lowercased(self) -> None:
        start, _ = await _sent(Response.plain("x").with_header("Cache-Control", "no-cache"))
        assert (b"cache-control", b"no-cache") in start["headers"]

    async def test_framing_headers_not_duplicated(self) -> None:
        response = Response.plain("abc").with_header("Content-Length", "999")
        start, _ = await _sent(response.with_header("Content-Type", "text/evil"))

        names = [name for name, _ in start["headers"]]
        assert names.count(b"content-length") == 1
        assert names.count(b"content-type") == 1
        assert (b"content-length", b"3") in start["headers"]

    async def test_head_keeps_length_drops_body(self) -> None:
        start, body = await _sent(Response.plain("Hello, World!"), head=True)

        assert (b"content-length", b"13") in start["headers"]
        assert body["body"] == b""

    async def test_no_content_has_no_body(self) -> None:
        start, body = await _sent(Response(b"ignored", 204))

        assert (b"content-length", b"0") in start["headers"]
        assert body["body"] == b""


class TestErrorResponse:
    def test_body_is_reason_phrase(self) -> None:
        response = error_response(NotFound("no route for '/x'"))

        assert response.status == 404
        assert response.text == "Not Found"
        assert response.content_type == "text/plain; charset=utf-8"

    def test_headers_carried(self) -> None:
        response = error_response(MethodNotAllowed({"GET"}))
        assert response.header("allow") == "GET"

    def test_detail_stays_out_of_body(self) -> None:
        assert error_response(HTTPError(400, "secret detail")).text == "Bad Request"
