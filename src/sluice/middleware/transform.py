"""On-demand module transform middleware.

Serves source modules transformed by the pipeline, their source maps,
and 304s for modules the browser already has. Falls through to the
next handler for everything it does not recognize.

Per request, strictly in order::

    classify (normalizing the URL)
      -> source map?           serve cached map or defer
      -> module request?       canonicalize, mark CSS variant,
                               304 if the etag matches,
                               else dispatch to the pipeline
      -> otherwise             defer
"""

import logging

from sluice.context import DispatchContext
from sluice.graph import ModuleGraph
from sluice.http.request import Request
from sluice.middleware.protocol import AnyResponse, Next
from sluice.transform.cache import mark_css_variant, not_modified
from sluice.transform.classify import RequestKind, classify, public_path_advice
from sluice.transform.dispatch import dispatch
from sluice.transform.outcome import TransformPipeline
from sluice.transform.sourcemap import resolve_source_map
from sluice.urls.normalize import canonical_module_url

logger = logging.getLogger("sluice.server")

# Distinct public-directory URLs remembered for warn-once; the set is
# cleared when full.
ADVISED_LIMIT = 512


class TransformMiddleware:
    """Middleware that serves transformed modules.

    The middleware holds no per-request state. Its only collaborators
    are a read-only module graph and the transform pipeline, and it
    makes at most one pipeline call per request.

    Usage::

        server.add_middleware(TransformMiddleware(
            DispatchContext.from_config(config),
            module_graph=graph,
            pipeline=pipeline,
        ))
    """

    __slots__ = ("_context", "_graph", "_pipeline", "_advised")

    def __init__(
        self,
        context: DispatchContext,
        *,
        module_graph: ModuleGraph,
        pipeline: TransformPipeline,
    ) -> None:
        self._context = context
        self._graph = module_graph
        self._pipeline = pipeline
        # URLs already warned about (diagnostics only)
        self._advised: set[str] = set()

    @property
    def context(self) -> DispatchContext:
        return self._context

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Serve a module, a source map, or a 304; otherwise fall through."""
        kind, url = classify(request.method, request.url)
        if kind is RequestKind.IGNORED or url is None:
            return await next(request)

        ctx = self._context
        if kind is RequestKind.SOURCE_MAP:
            response = await resolve_source_map(ctx, self._graph, request, url)
            if response is None:
                return await next(request)
            return response

        self._advise_public_path(url)

        if kind is RequestKind.MODULE:
            url = mark_css_variant(
                canonical_module_url(url), request.headers.accepts("text/css")
            )

            cached = await not_modified(ctx, self._graph, url, request.if_none_match)
            if cached is not None:
                return cached

            response = await dispatch(ctx, self._pipeline, request, url)
            if response is not None:
                return response

        return await next(request)

    def _advise_public_path(self, url: str) -> None:
        """Warn (once per URL) about explicit public-directory URLs."""
        replacement = public_path_advice(self._context.public_prefix, url)
        if replacement is None or url in self._advised:
            return
        if len(self._advised) >= ADVISED_LIMIT:
            self._advised.clear()
        self._advised.add(url)
        logger.warning(
            "files in the public directory are served at the root path.\n"
            "Instead of %s, use %s.",
            url,
            replacement,
        )
