"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> AnyResponse

Built-in middleware:
    TransformMiddleware -- Serve on-demand transformed modules and their source maps
"""

from sluice.middleware.protocol import AnyResponse, Middleware, Next
from sluice.middleware.transform import TransformMiddleware

__all__ = [
    "AnyResponse",
    "Middleware",
    "Next",
    "TransformMiddleware",
]
