"""Module graph access.

The transform middleware only ever asks the graph one question: what
was the last transform result for this URL? ``ModuleGraph`` is that
read-only seam. ``MemoryModuleGraph`` is a dict-backed implementation
for development and tests.
"""

from typing import Protocol

from sluice.transform.outcome import (
    TransformOutcome,
    TransformPipeline,
    TransformResult,
    Transformed,
)


class ModuleGraph(Protocol):
    """Read-only snapshot access to cached transform results."""

    async def lookup(self, url: str) -> TransformResult | None:
        """Return the cached result for *url*, or None. Never transforms."""
        ...


class MemoryModuleGraph:
    """Transform results keyed by canonical module URL.

    Usage::

        graph = MemoryModuleGraph()
        server = DevServer(config, module_graph=graph, pipeline=graph.recording(pipeline))
    """

    __slots__ = ("_results",)

    def __init__(self) -> None:
        self._results: dict[str, TransformResult] = {}

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, url: object) -> bool:
        return url in self._results

    async def lookup(self, url: str) -> TransformResult | None:
        return self._results.get(url)

    def record(self, url: str, result: TransformResult) -> None:
        """Store *result* as the latest transform of *url*."""
        self._results[url] = result

    def invalidate(self, url: str) -> bool:
        """Forget the result for *url*. Returns True if one was stored."""
        return self._results.pop(url, None) is not None

    def invalidate_all(self) -> None:
        self._results.clear()

    def recording(self, pipeline: TransformPipeline) -> TransformPipeline:
        """Wrap *pipeline* so every successful transform is recorded here."""

        async def recorded(url: str, *, html: bool) -> TransformOutcome:
            outcome = await pipeline(url, html=html)
            if isinstance(outcome, Transformed):
                self.record(url, outcome.result)
            return outcome

        return recorded
