"""Error handling pipeline for sluice requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or plain-text defaults. This is where
errors forwarded by middleware end up.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from sluice.errors import HTTPError
from sluice.http.request import Request
from sluice.http.response import Response

logger = logging.getLogger("sluice.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers. A ``str`` result
    becomes the response body.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    if isinstance(result, Response):
        return result
    return Response(body=str(result))


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.url, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    return response.with_headers(exc.headers)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    show_tracebacks: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.url)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        if response.status == 200:
            response = response.with_status(500)
        return response

    if show_tracebacks:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)

    return Response(body="Internal Server Error", status=500)
