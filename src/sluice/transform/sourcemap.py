"""``*.map`` sub-requests, answered from cached transform results."""

import json
import re

from sluice.context import DispatchContext
from sluice.graph import ModuleGraph
from sluice.http.request import Request
from sluice.http.response import Response
from sluice.server.send import module_response

_MAP_SUFFIX_RE = re.compile(r"\.map($|\?)")


def source_url(map_url: str) -> str:
    """The module a source map belongs to: ``/a.js.map?v=1`` -> ``/a.js?v=1``."""
    return _MAP_SUFFIX_RE.sub(r"\1", map_url, count=1)


async def resolve_source_map(
    ctx: DispatchContext,
    graph: ModuleGraph,
    request: Request,
    url: str,
) -> Response | None:
    """Serve the cached map for *url*, or None if there is none."""
    result = await graph.lookup(source_url(url))
    if result is None or result.map is None:
        return None
    return module_response(
        json.dumps(result.map, separators=(",", ":")),
        "json",
        if_none_match=request.if_none_match,
        headers=ctx.headers,
    )
