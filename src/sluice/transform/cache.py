"""Conditional caching for module requests.

Two steps, always in this order:

1. CSS variant disambiguation. A stylesheet requested by a ``<link>``
   (``Accept: text/css``) and the same file imported from a script are
   different responses (raw CSS vs. a JS module wrapping it), so the
   former gets a ``direct`` marker and with it its own cache key.
2. The 304 short-circuit. A pure module graph read; never transforms.
"""

from sluice.context import DispatchContext
from sluice.graph import ModuleGraph
from sluice.http.response import Response
from sluice.urls.normalize import inject_query, prettify_url
from sluice.urls.predicates import is_css_request, is_direct_request


def mark_css_variant(url: str, accepts_css: bool) -> str:
    """Add the ``direct`` marker to stylesheet requests made by the browser.

    *accepts_css* is whether any ``Accept`` header mentions ``text/css``.
    """
    if accepts_css and is_css_request(url) and not is_direct_request(url):
        return inject_query(url, "direct")
    return url


async def not_modified(
    ctx: DispatchContext,
    graph: ModuleGraph,
    url: str,
    if_none_match: str | None,
) -> Response | None:
    """Return an empty 304 if the client's etag matches the cached result."""
    if not if_none_match:
        return None
    cached = await graph.lookup(url)
    if cached is None or cached.etag != if_none_match:
        return None
    if ctx.debug.enabled:
        ctx.debug.sink.debug("[304] %s", prettify_url(url, ctx.root))
    return Response(body="", status=304)
