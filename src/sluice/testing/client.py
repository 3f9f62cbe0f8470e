"""Async test client for sluice servers.

Uses the same Request and Response types as production.
No wrapper translation layer.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import unquote

from sluice.app import DevServer
from sluice.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for sluice servers.

    Returns the same ``Response`` type used in production. Sends requests
    through the ASGI interface directly: no HTTP involved.

    Usage::

        async with TestClient(server) as client:
            response = await client.get("/src/main.ts")
            assert response.status == 200
    """

    __slots__ = ("server",)

    def __init__(self, server: DevServer) -> None:
        self.server = server

    async def __aenter__(self) -> TestClient:
        self.server._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, url: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request. *url* is sent verbatim, escapes included."""
        return await self.request("GET", url, headers=headers)

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, _, query_string = url.partition("?")

        raw_headers: list[tuple[bytes, bytes]] = []
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": unquote(path_part),
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        # The request body is sent once; later receive() calls block until
        # the exchange is over, as with a client that stays connected.
        disconnect_trigger = asyncio.Event()
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": b"", "more_body": False}
            await disconnect_trigger.wait()
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        try:
            await self.server(scope, receive, send)
        finally:
            disconnect_trigger.set()

        content_type = "text/plain; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
