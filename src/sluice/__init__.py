"""Sluice: serve source modules transformed on demand.

The request dispatcher of a development server: normalizes and
classifies module URLs, answers source-map sub-requests, short-circuits
unchanged modules with 304s, and turns optimizer races into retryable
504s.

Basic usage::

    from sluice import DevServer, MemoryModuleGraph, ServerConfig, adapt_pipeline

    graph = MemoryModuleGraph()
    server = DevServer(
        ServerConfig(root="./web"),
        module_graph=graph,
        pipeline=graph.recording(adapt_pipeline(compile_module)),
    )

``server`` is an ASGI application; run it under any ASGI server.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AnyResponse",
    "ConfigurationError",
    "DebugLog",
    "DevServer",
    "DispatchContext",
    "EMPTY",
    "Empty",
    "Failed",
    "HTTPError",
    "MalformedURL",
    "MemoryModuleGraph",
    "Middleware",
    "ModuleGraph",
    "Next",
    "NotFound",
    "PipelineError",
    "PipelineErrorKind",
    "Request",
    "Response",
    "ServerConfig",
    "SluiceError",
    "TransformMiddleware",
    "TransformOutcome",
    "TransformPipeline",
    "TransformResult",
    "Transformed",
    "adapt_pipeline",
]


def __getattr__(name: str) -> object:
    """Lazy imports: keep ``import sluice`` cheap."""
    if name == "DevServer":
        from sluice.app import DevServer

        return DevServer
    if name in ("DebugLog", "ServerConfig"):
        from sluice import config

        return getattr(config, name)
    if name == "DispatchContext":
        from sluice.context import DispatchContext

        return DispatchContext
    if name in (
        "ConfigurationError",
        "HTTPError",
        "MalformedURL",
        "NotFound",
        "PipelineError",
        "PipelineErrorKind",
        "SluiceError",
    ):
        from sluice import errors

        return getattr(errors, name)
    if name in ("MemoryModuleGraph", "ModuleGraph"):
        from sluice import graph

        return getattr(graph, name)
    if name in ("AnyResponse", "Middleware", "Next"):
        from sluice.middleware import protocol

        return getattr(protocol, name)
    if name == "TransformMiddleware":
        from sluice.middleware.transform import TransformMiddleware

        return TransformMiddleware
    if name == "Request":
        from sluice.http.request import Request

        return Request
    if name == "Response":
        from sluice.http.response import Response

        return Response
    if name in (
        "EMPTY",
        "Empty",
        "Failed",
        "TransformOutcome",
        "TransformPipeline",
        "TransformResult",
        "Transformed",
        "adapt_pipeline",
    ):
        from sluice.transform import outcome

        return getattr(outcome, name)
    msg = f"module 'sluice' has no attribute {name!r}"
    raise AttributeError(msg)
