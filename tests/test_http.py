"""Tests for methodguard.http — Request and Response."""

import pytest

from methodguard.http.request import Request
from methodguard.http.response import Response


def _receive_chunks(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive():
        return messages.pop(0)

    return receive


class TestRequest:
    def test_from_asgi_headers(self) -> None:
        scope = {
            "method": "delete",
            "path": "/users",
            "headers": [(b"Content-Type", b"text/plain"), (b"X-A", b"1"), (b"x-a", b"2")],
        }
        request = Request.from_asgi(scope, _receive_chunks(b""))
        assert request.method == "DELETE"
        assert request.path == "/users"
        assert request.headers == {"content-type": "text/plain", "x-a": "1"}

    @pytest.mark.anyio
    async def test_body_joins_chunks_once(self) -> None:
        scope = {"method": "POST", "path": "/", "headers": []}
        request = Request.from_asgi(scope, _receive_chunks(b'{"a": ', b"1}"))
        assert await request.json() == {"a": 1}
        # Cached: the receive queue is already drained
        assert await request.body() == b'{"a": 1}'


class TestResponse:
    def test_with_header_returns_new(self) -> None:
        original = Response("hi")
        changed = original.with_header("Allow", "GET")
        assert original.headers == ()
        assert changed.header("allow") == "GET"

    def test_with_headers(self) -> None:
        response = Response().with_headers({"A": "1", "B": "2"})
        assert response.headers == (("A", "1"), ("B", "2"))

    def test_with_status(self) -> None:
        assert Response().with_status(405).status == 405

    def test_json_body(self) -> None:
        response = Response.json_body({"a": 1}, status=405)
        assert response.status == 405
        assert response.content_type == "application/json"
        assert response.json() == {"a": 1}

    def test_body_bytes_and_text(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response("é".encode()).text == "é"
