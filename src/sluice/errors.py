"""Sluice exception hierarchy.

Shared across the URL layer, the transform middleware, and the ASGI
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass
from enum import StrEnum


class SluiceError(Exception):
    """Base for all sluice-specific errors."""


class ConfigurationError(SluiceError):
    """Raised when server configuration is invalid."""


@dataclass(frozen=True, slots=True)
class HTTPError(SluiceError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or the terminal handler. The ASGI handler
    catches these and dispatches to the matching ``@server.error()``
    handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 - conventional name in web frameworks
    """404: nothing in the middleware chain handled the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MalformedURL(SluiceError, ValueError):
    """A request URL contained an escape sequence that cannot be decoded."""

    def __init__(self, url: str, reason: str = "malformed escape sequence") -> None:
        super().__init__(f"URI malformed: {reason} in {url!r}")
        self.url = url
        self.reason = reason


class PipelineErrorKind(StrEnum):
    """Error codes a transform pipeline can report."""

    OUTDATED_OPTIMIZATION = "ERR_OUTDATED_OPTIMIZED_DEP"
    OPTIMIZATION_TIMEOUT = "ERR_OPTIMIZE_DEPS_TIMEOUT"
    TRANSFORM = "ERR_TRANSFORM"


# The optimizer is rebuilding its output; the client should retry.
TRANSIENT_KINDS = frozenset(
    {PipelineErrorKind.OUTDATED_OPTIMIZATION, PipelineErrorKind.OPTIMIZATION_TIMEOUT}
)


class PipelineError(SluiceError):
    """A failure reported by the transform pipeline.

    ``kind`` decides how the transform middleware reacts: transient
    optimizer races become a 504, everything else propagates to the
    central error handler unchanged.
    """

    def __init__(
        self,
        kind: PipelineErrorKind,
        message: str,
        *,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.url = url

    @property
    def code(self) -> str:
        """The wire-level error code (``kind.value``)."""
        return self.kind.value

    @property
    def transient(self) -> bool:
        """True for optimizer races that a retry is expected to resolve."""
        return self.kind in TRANSIENT_KINDS

    def __repr__(self) -> str:
        return f"PipelineError({self.kind.name}, {self.message!r})"
