"""Tests for sluice.transform.sourcemap: ``*.map`` sub-requests."""

import json

from sluice.context import DispatchContext
from sluice.transform.outcome import TransformResult
from sluice.transform.sourcemap import resolve_source_map, source_url

MAP = {"version": 3, "sources": ["app.ts"], "mappings": "AAAA"}


class TestSourceURL:
    def test_plain(self) -> None:
        assert source_url("/src/app.js.map") == "/src/app.js"

    def test_query_preserved(self) -> None:
        assert source_url("/src/app.js.map?v=1") == "/src/app.js?v=1"

    def test_only_the_suffix(self) -> None:
        assert source_url("/a.map.js.map") == "/a.map.js"


class TestResolveSourceMap:
    async def test_serves_cached_map(self, ctx, graph, make_request) -> None:
        graph.record("/src/app.js", TransformResult(code="x", etag="abc", map=MAP))

        response = await resolve_source_map(ctx, graph, make_request("/src/app.js.map"), "/src/app.js.map")

        assert response is not None
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.text == json.dumps(MAP, separators=(",", ":"))
        assert json.loads(response.text) == MAP

    async def test_merges_static_headers(self, graph, make_request) -> None:
        ctx = DispatchContext(
            root="/proj",
            optimized_dep_prefix="/.sluice/deps",
            headers=(("X-Dev", "1"),),
        )
        graph.record("/src/app.js", TransformResult(code="x", etag="abc", map=MAP))

        response = await resolve_source_map(ctx, graph, make_request("/src/app.js.map"), "/src/app.js.map")

        assert response is not None
        assert response.header("X-Dev") == "1"

    async def test_result_without_map(self, ctx, graph, make_request) -> None:
        graph.record("/src/app.js", TransformResult(code="x", etag="abc"))

        assert await resolve_source_map(ctx, graph, make_request("/src/app.js.map"), "/src/app.js.map") is None

    async def test_missing_module(self, ctx, graph, make_request) -> None:
        assert await resolve_source_map(ctx, graph, make_request("/src/app.js.map"), "/src/app.js.map") is None
        assert graph.lookups == ["/src/app.js"]
