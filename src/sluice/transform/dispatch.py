"""Pipeline dispatch and success responses."""

from typing import Literal, assert_never

from sluice.context import DispatchContext
from sluice.http.request import Request
from sluice.http.response import Handled, Response
from sluice.server.send import IMMUTABLE, NO_CACHE, module_response
from sluice.transform.outcome import Empty, Failed, TransformPipeline, Transformed
from sluice.transform.races import race_response
from sluice.urls.predicates import has_dep_version, is_direct_css_request


def content_kind(url: str) -> Literal["css", "js"]:
    """Only direct stylesheet requests are CSS; everything else runs as script."""
    return "css" if is_direct_css_request(url) else "js"


def cache_policy(ctx: DispatchContext, url: str) -> str:
    """Versioned and pre-bundled dependencies never change under the same URL."""
    if has_dep_version(url) or ctx.is_optimized_dep_url(url):
        return IMMUTABLE
    return NO_CACHE


async def dispatch(
    ctx: DispatchContext,
    pipeline: TransformPipeline,
    request: Request,
    url: str,
) -> Response | Handled | None:
    """Transform *url* and build its response.

    Returns None when the pipeline has nothing for *url*, so the
    caller can defer to the next handler.
    """
    outcome = await pipeline(url, html=request.headers.accepts("text/html"))
    match outcome:
        case Transformed(result):
            return module_response(
                result.code,
                content_kind(url),
                if_none_match=request.if_none_match,
                etag=result.etag,
                cache_control=cache_policy(ctx, url),
                headers=ctx.headers,
                source_map=result.map,
            )
        case Empty():
            return None
        case Failed(error):
            return race_response(request, error)
        case _:
            assert_never(outcome)
