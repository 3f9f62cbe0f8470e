"""Tests for sluice.server.sender response emission rules."""

import pytest

from sluice.http.response import Handled, Response
from sluice.server.sender import ResponseWriter, send_response


@pytest.fixture
def messages() -> list[dict]:
    return []


@pytest.fixture
def writer(messages) -> ResponseWriter:
    async def send(message: dict) -> None:
        messages.append(message)

    return ResponseWriter(send)


class TestSendResponseNoBodyStatuses:
    async def test_304_drops_body_and_sets_zero_content_length(self, writer, messages) -> None:
        # Even if a handler accidentally attaches body content, the sender
        # must enforce RFC no-body semantics for 304.
        await send_response(Response("unexpected-body").with_status(304), writer)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_504_has_empty_body(self, writer, messages) -> None:
        await send_response(Response(body="", status=504), writer)

        assert messages[0]["status"] == 504
        assert messages[1]["body"] == b""

    async def test_200_preserves_body(self, writer, messages) -> None:
        await send_response(Response("ok", content_type="application/javascript"), writer)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert headers[b"content-type"] == b"application/javascript"
        assert messages[1]["body"] == b"ok"

    async def test_header_names_lowercased(self, writer, messages) -> None:
        await send_response(Response("ok").with_header("ETag", "abc"), writer)

        assert (b"etag", b"abc") in messages[0]["headers"]


class TestCheckBeforeWrite:
    async def test_second_response_is_dropped(self, writer, messages) -> None:
        await send_response(Response("first"), writer)
        await send_response(Response(body="", status=504), writer)

        assert [m["type"] for m in messages] == ["http.response.start", "http.response.body"]
        assert messages[0]["status"] == 200
        assert writer.finalized

    async def test_handled_writes_nothing(self, writer, messages) -> None:
        await send_response(Handled(), writer)

        assert messages == []
        assert not writer.finalized

    async def test_disconnected_client(self, writer, messages) -> None:
        writer.mark_disconnected()

        await send_response(Response("late"), writer)

        assert messages == []

    async def test_body_before_start_is_dropped(self, writer, messages) -> None:
        assert await writer.body(b"x") is False
        assert messages == []

    async def test_streamed_body_finalizes_on_last_chunk(self, writer, messages) -> None:
        await writer.start(200, [])
        await writer.body(b"a", more_body=True)
        assert not writer.finalized

        await writer.body(b"b")
        assert writer.finalized
        assert await writer.body(b"c") is False
