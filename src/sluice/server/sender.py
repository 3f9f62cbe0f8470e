"""ASGI response sending: translates sluice Response types to ASGI messages.

Every exchange writes through one ``ResponseWriter``, which refuses to
write after the response is complete.
"""

import logging

from sluice._internal.asgi import Send
from sluice.http.response import Handled, Response

logger = logging.getLogger("sluice.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class ResponseWriter:
    """Check-before-write wrapper around an ASGI ``send`` callable.

    ``finalized`` turns True once the final body message is sent (or
    the client disconnected); later writes are dropped.
    """

    __slots__ = ("_finalized", "_send", "_started")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._started = False
        self._finalized = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def finalized(self) -> bool:
        return self._finalized

    def mark_disconnected(self) -> None:
        """Record that the client went away; nothing more will be sent."""
        self._finalized = True

    async def start(self, status: int, headers: list[tuple[bytes, bytes]]) -> bool:
        """Send the response head. Returns False if it was dropped."""
        if self._started or self._finalized:
            return False
        self._started = True
        await self._send({"type": "http.response.start", "status": status, "headers": headers})
        return True

    async def body(self, chunk: bytes, *, more_body: bool = False) -> bool:
        """Send a body chunk. Returns False if it was dropped."""
        if not self._started or self._finalized:
            return False
        if not more_body:
            self._finalized = True
        await self._send({"type": "http.response.body", "body": chunk, "more_body": more_body})
        return True


async def send_response(response: Response | Handled, writer: ResponseWriter) -> None:
    """Translate a sluice Response into ASGI send() calls."""
    if isinstance(response, Handled):
        return
    if writer.started or writer.finalized:
        logger.debug("dropping %d response: exchange already finalized", response.status)
        return

    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await writer.start(response.status, raw_headers)
    await writer.body(body)
