"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Response:
        """Return a new Response with additional headers (mapping or pairs)."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=(*self.headers, *pairs))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Lookup --

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class Handled:
    """Marker returned when the exchange was already finalized.

    The sender writes nothing for it. Provides no-op ``.with_*()``
    methods so outer middleware chains don't crash.
    """

    reason: str = ""

    def with_status(self, status: int) -> Handled:  # noqa: ARG002
        """No-op: nothing more will be sent."""
        return self

    def with_header(self, name: str, value: str) -> Handled:  # noqa: ARG002
        """No-op: nothing more will be sent."""
        return self

    def with_headers(self, headers: object) -> Handled:  # noqa: ARG002
        """No-op: nothing more will be sent."""
        return self

    def with_content_type(self, content_type: str) -> Handled:  # noqa: ARG002
        """No-op: nothing more will be sent."""
        return self
