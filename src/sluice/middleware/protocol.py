"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> AnyResponse: ...

No base class required. The framework checks the shape, not the lineage.

Deferring to the next handler is ``return await next(request)``.
Forwarding an error is raising it: the ASGI handler renders whatever
propagates out of the chain.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from sluice.http.request import Request
from sluice.http.response import Handled, Response

# Any response type the pipeline can produce
AnyResponse: TypeAlias = Response | Handled

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Protocol for sluice middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> AnyResponse:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class TransformMiddleware:
            async def __call__(self, request: Request, next: Next) -> AnyResponse:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...
