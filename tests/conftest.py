"""Shared fakes for the sluice test suite."""

from collections.abc import Callable
from typing import Any

import pytest

from sluice.context import DispatchContext
from sluice.graph import MemoryModuleGraph
from sluice.http.request import Request
from sluice.server.sender import ResponseWriter
from sluice.transform.outcome import EMPTY, TransformOutcome, TransformResult


class CountingPipeline:
    """Pipeline fake: returns ``outcome`` and records every call."""

    def __init__(self, outcome: TransformOutcome = EMPTY) -> None:
        self.outcome = outcome
        self.calls: list[tuple[str, bool]] = []

    async def __call__(self, url: str, *, html: bool) -> TransformOutcome:
        self.calls.append((url, html))
        return self.outcome


class CountingGraph(MemoryModuleGraph):
    """In-memory graph that also records every lookup."""

    __slots__ = ("lookups",)

    def __init__(self) -> None:
        super().__init__()
        self.lookups: list[str] = []

    async def lookup(self, url: str) -> TransformResult | None:
        self.lookups.append(url)
        return await super().lookup(url)


@pytest.fixture
def pipeline() -> CountingPipeline:
    return CountingPipeline()


@pytest.fixture
def graph() -> CountingGraph:
    return CountingGraph()


@pytest.fixture
def ctx() -> DispatchContext:
    return DispatchContext(root="/proj", optimized_dep_prefix="/.sluice/deps")


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a Request for *url* (sent verbatim) with optional headers."""

    def build(
        url: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        writer: ResponseWriter | None = None,
    ) -> Request:
        path, _, query = url.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": query.encode("latin-1"),
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in (headers or {}).items()
            ],
        }
        return Request.from_asgi(scope, writer=writer)

    return build
