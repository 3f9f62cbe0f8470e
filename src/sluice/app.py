"""Sluice dev server application.

Mutable during setup (middleware, error handlers). Frozen when the
first ASGI call arrives, at which point the transform middleware is
installed innermost and the middleware chain is compiled once.
"""

import threading
from collections.abc import Callable
from typing import Any, TypeAlias

from sluice._internal.asgi import Receive, Scope, Send
from sluice.config import ServerConfig
from sluice.context import DispatchContext
from sluice.errors import ConfigurationError
from sluice.graph import MemoryModuleGraph, ModuleGraph
from sluice.middleware.protocol import Middleware, Next
from sluice.middleware.transform import TransformMiddleware
from sluice.server.handler import build_chain, handle_request
from sluice.transform.outcome import TransformPipeline

ErrorHandler: TypeAlias = Callable[..., Any]


class DevServer:
    """ASGI application serving on-demand transformed modules.

    Usage::

        graph = MemoryModuleGraph()
        server = DevServer(
            ServerConfig(root="./web"),
            module_graph=graph,
            pipeline=graph.recording(adapt_pipeline(compile_module)),
        )

        @server.error(404)
        def missing(request):
            return f"nothing at {request.path}"

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one caller compiles the chain even when
        several workers receive their first request at once.
    """

    __slots__ = (
        "_chain",
        "_context",
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_transform",
        "config",
        "module_graph",
        "pipeline",
    )

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        pipeline: TransformPipeline,
        module_graph: ModuleGraph | None = None,
    ) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self.module_graph: ModuleGraph = module_graph if module_graph is not None else MemoryModuleGraph()
        self.pipeline: TransformPipeline = pipeline
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state: set during _freeze()
        self._context: DispatchContext | None = None
        self._transform: TransformMiddleware | None = None
        self._chain: Next | None = None

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware; it runs before the transform middleware."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def error(self, code_or_exception: int | type) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler for a status code or exception type."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Compiled state --

    @property
    def context(self) -> DispatchContext:
        """The resolved dispatch context (freezes the server)."""
        self._ensure_frozen()
        assert self._context is not None
        return self._context

    @property
    def transform(self) -> TransformMiddleware:
        """The installed transform middleware (freezes the server)."""
        self._ensure_frozen()
        assert self._transform is not None
        return self._transform

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the server after it has started handling requests. "
                "Register middleware and error handlers before the first request."
            )
            raise ConfigurationError(msg)

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        self._context = DispatchContext.from_config(self.config)
        self._transform = TransformMiddleware(
            self._context,
            module_graph=self.module_graph,
            pipeline=self.pipeline,
        )
        self._chain = build_chain((*self._middleware_list, self._transform))
        self._frozen = True

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self._ensure_frozen()
        assert self._chain is not None
        await handle_request(
            scope,
            receive,
            send,
            chain=self._chain,
            error_handlers=self._error_handlers,
            show_tracebacks=self.config.show_tracebacks,
        )
