"""Raw ASGI callable types.

Only the handler, the sender, and the test client touch these; the
rest of sluice works with ``Request`` and ``Response``.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]


def raw_url_from_scope(scope: Scope) -> str:
    """Rebuild the request URL as the client sent it.

    ``scope["path"]`` is already percent-decoded by the server, so the
    still-encoded ``raw_path`` is preferred. Falls back to ``path`` for
    servers that omit ``raw_path``.
    """
    raw_path: bytes = scope.get("raw_path") or b""
    path = raw_path.decode("latin-1") if raw_path else scope.get("path", "/")
    query: bytes = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path
