"""Tests for restroute.server.sender — Response to ASGI messages."""

from typing import Any

import pytest

from restroute.http.response import Response
from restroute.server.sender import send_response


async def _capture(response: Response) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: Any) -> None:
        messages.append(dict(message))

    await send_response(response, send)
    return messages


@pytest.mark.anyio
async def test_start_and_body() -> None:
    messages = await _capture(Response("hi", status=201).with_header("X-Custom", "1"))
    start, body = messages
    assert start["type"] == "http.response.start"
    assert start["status"] == 201
    assert (b"x-custom", b"1") in start["headers"]
    assert (b"content-length", b"2") in start["headers"]
    assert body == {"type": "http.response.body", "body": b"hi"}


@pytest.mark.anyio
async def test_existing_content_length_is_replaced() -> None:
    messages = await _capture(Response("abc").with_header("Content-Length", "99"))
    lengths = [value for name, value in messages[0]["headers"] if name == b"content-length"]
    assert lengths == [b"3"]


@pytest.mark.anyio
async def test_no_body_for_204() -> None:
    messages = await _capture(Response("ignored", status=204))
    assert messages[1]["body"] == b""
    assert (b"content-length", b"0") in messages[0]["headers"]


@pytest.mark.anyio
async def test_head_keeps_length_but_drops_body() -> None:
    messages: list[dict[str, Any]] = []

    async def send(message: Any) -> None:
        messages.append(dict(message))

    await send_response(Response("hello"), send, head=True)
    assert (b"content-length", b"5") in messages[0]["headers"]
    assert messages[1]["body"] == b""
