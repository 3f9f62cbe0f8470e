"""Immutable per-server dispatch context.

Everything the transform components need to know about the server,
computed once from ``ServerConfig`` and passed explicitly into every
call. No component reads configuration through closures or globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from sluice.config import DebugLog, ServerConfig
from sluice.urls.predicates import FS_PREFIX


@dataclass(frozen=True, slots=True)
class DispatchContext:
    """Resolved, read-only view of the server configuration.

    Attributes:
        root: Project root as a POSIX path string.
        public_prefix: Root-relative URL prefix of the public directory
            (e.g. ``"/public/"``) when it lives strictly inside the root,
            otherwise ``None``.
        optimized_dep_prefix: URL prefix under which the optimizer's
            bundles are served.
        headers: Static headers merged into every module response.
        debug: Cache diagnostics switch and sink.
    """

    root: str
    optimized_dep_prefix: str
    public_prefix: str | None = None
    headers: tuple[tuple[str, str], ...] = ()
    debug: DebugLog = field(default_factory=DebugLog)

    @classmethod
    def from_config(cls, config: ServerConfig) -> DispatchContext:
        root = config.root_path
        public_prefix = None
        public = config.public_path
        if public is not None and public != root and public.is_relative_to(root):
            public_prefix = "/" + public.relative_to(root).as_posix() + "/"

        deps = config.deps_path
        relative = os.path.relpath(deps, root).replace(os.sep, "/")
        if relative.startswith("../") or relative == "..":
            optimized_dep_prefix = FS_PREFIX + deps.as_posix().lstrip("/")
        else:
            optimized_dep_prefix = "/" + relative

        return cls(
            root=root.as_posix(),
            optimized_dep_prefix=optimized_dep_prefix,
            public_prefix=public_prefix,
            headers=config.headers,
            debug=config.debug,
        )

    def is_optimized_dep_url(self, url: str) -> bool:
        """Whether *url* points at a bundle produced by the dependency optimizer."""
        return url.startswith(self.optimized_dep_prefix)
