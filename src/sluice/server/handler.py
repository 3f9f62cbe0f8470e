"""ASGI handler: translates ASGI scope/messages to sluice types.

The only component besides the sender that touches raw ASGI directly.
Converts the scope to a Request, runs it through the middleware chain,
maps anything raised to an error response, and sends the result.
"""

import asyncio
import contextlib
from collections.abc import Callable
from typing import Any

from sluice._internal.asgi import Receive, Scope, Send
from sluice.errors import HTTPError, NotFound
from sluice.http.request import Request
from sluice.http.response import Handled, Response
from sluice.middleware.protocol import AnyResponse, Next
from sluice.server.errors import handle_http_error, handle_internal_error
from sluice.server.sender import ResponseWriter, send_response


async def watch_disconnect(receive: Receive, writer: ResponseWriter) -> None:
    """Mark *writer* disconnected once the client goes away."""
    while True:
        message = await receive()
        if message.get("type") == "http.disconnect":
            writer.mark_disconnected()
            return


async def not_found(request: Request) -> AnyResponse:
    """Terminal handler: nothing in the chain claimed the request."""
    raise NotFound(f"Not Found: {request.path}")


def build_chain(middleware: tuple[Callable[..., Any], ...], endpoint: Next = not_found) -> Next:
    """Wrap *middleware* around *endpoint*, first entry outermost."""
    handler = endpoint
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> AnyResponse:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    chain: Next,
    error_handlers: dict[int | type, Callable[..., Any]],
    show_tracebacks: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline.

    While the chain runs, ``receive`` is watched for ``http.disconnect``
    so a client that went away is never written to.
    """
    if scope["type"] != "http":
        return

    writer = ResponseWriter(send)
    request = Request.from_asgi(scope, writer)
    monitor = asyncio.create_task(watch_disconnect(receive, writer))

    response: Response | Handled
    try:
        response = await chain(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, show_tracebacks)
    finally:
        monitor.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await monitor

    await send_response(response, writer)
