"""Server configuration.

ServerConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. Paths are resolved
once, into a ``DispatchContext``, when the server freezes.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sluice.errors import ConfigurationError

_INVALID_HEADER_CHARS = frozenset(" \t\r\n:")


@dataclass(frozen=True, slots=True)
class DebugLog:
    """Where cache diagnostics go, and whether they are emitted at all.

    Replaces an ambient ``DEBUG`` environment switch: the transform
    middleware only writes ``[304]`` lines to *sink* when *enabled*.
    """

    enabled: bool = False
    sink: logging.Logger = field(default_factory=lambda: logging.getLogger("sluice.cache"))


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Dev server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(
            root="./web",
            headers=(("Access-Control-Allow-Origin", "*"),),
            debug=DebugLog(enabled=True),
        )
    """

    # Project
    root: str | Path = "."
    public_dir: str | Path | None = "public"  # Relative to root unless absolute
    cache_dir: str | Path = ".sluice"  # Optimized deps live in <cache_dir>/deps

    # Headers merged into every module response
    headers: tuple[tuple[str, str], ...] = ()

    # Diagnostics
    debug: DebugLog = field(default_factory=DebugLog)
    show_tracebacks: bool = False

    def __post_init__(self) -> None:
        for name, value in self.headers:
            if not name or any(ch in _INVALID_HEADER_CHARS for ch in name):
                msg = f"Invalid response header name: {name!r}"
                raise ConfigurationError(msg)
            if "\r" in value or "\n" in value:
                msg = f"Response header {name!r} contains a line break"
                raise ConfigurationError(msg)

    @property
    def root_path(self) -> Path:
        """The project root, resolved to an absolute path."""
        return Path(self.root).resolve()

    @property
    def public_path(self) -> Path | None:
        """The public asset directory, resolved against the root."""
        if self.public_dir is None:
            return None
        return (self.root_path / self.public_dir).resolve()

    @property
    def deps_path(self) -> Path:
        """Directory the dependency optimizer writes its bundles to."""
        return (self.root_path / self.cache_dir / "deps").resolve()
