"""Immutable HTTP request.

Frozen metadata for one exchange. The transform middleware only reads
the method, the raw URL, and a few headers, so the body is never
read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sluice._internal.asgi import Scope, raw_url_from_scope
from sluice.http.headers import Headers

if TYPE_CHECKING:
    from sluice.server.sender import ResponseWriter


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``url`` is the request target exactly as the client sent it: path
    and query string, still percent-encoded. ``path`` is the server's
    decoded path and is only used for log lines.
    """

    method: str
    url: str
    path: str
    headers: Headers
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: the exchange's response writer, for check-before-write
    _writer: ResponseWriter | None = field(default=None, repr=False, compare=False)

    # -- Computed properties --

    @property
    def if_none_match(self) -> str | None:
        """The ``If-None-Match`` header value, if the client sent one."""
        return self.headers.get("if-none-match")

    @property
    def response_finalized(self) -> bool:
        """True once a complete response was written or the client went away."""
        return self._writer is not None and self._writer.finalized

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        writer: ResponseWriter | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope."""
        client: Any = scope.get("client")
        return cls(
            method=scope["method"],
            url=raw_url_from_scope(scope),
            path=scope.get("path", "/"),
            headers=Headers(tuple(scope.get("headers", ()))),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _writer=writer,
        )
