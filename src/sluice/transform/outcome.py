"""Transform results and the tagged outcome of a pipeline call.

The pipeline never signals "not found" or "optimizer race" by raising.
It returns one of three shapes, and the dispatcher matches on them::

    match await pipeline(url, html=False):
        case Transformed(result): ...
        case Empty(): ...
        case Failed(error): ...
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from sluice.errors import PipelineError

SourceMap: TypeAlias = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Code produced for one module URL.

    The etag changes whenever the code does; sluice trusts that and
    compares etags only.
    """

    code: str
    etag: str
    map: SourceMap | None = None


@dataclass(frozen=True, slots=True)
class Transformed:
    result: TransformResult


@dataclass(frozen=True, slots=True)
class Empty:
    """The URL is not a transformable module; another handler should try."""


@dataclass(frozen=True, slots=True)
class Failed:
    error: PipelineError


TransformOutcome: TypeAlias = Transformed | Empty | Failed

EMPTY = Empty()


class TransformPipeline(Protocol):
    """Resolves, loads and transforms the module at *url*.

    ``html`` is True when the request is a page navigation
    (``Accept`` mentions ``text/html``).
    """

    async def __call__(self, url: str, *, html: bool) -> TransformOutcome: ...


RaisingTransform: TypeAlias = Callable[..., Awaitable[TransformResult | None]]


def adapt_pipeline(transform: RaisingTransform) -> TransformPipeline:
    """Wrap an exception-raising transform function as a ``TransformPipeline``.

    ``transform(url, html=...)`` returns a result or ``None``, and
    signals failures by raising ``PipelineError``. Those become
    ``Failed`` outcomes. Any other exception propagates unchanged.

    Usage::

        async def compile_module(url: str, *, html: bool) -> TransformResult | None:
            ...

        server = DevServer(config, pipeline=adapt_pipeline(compile_module))
    """

    async def pipeline(url: str, *, html: bool) -> TransformOutcome:
        try:
            result = await transform(url, html=html)
        except PipelineError as exc:
            return Failed(exc)
        if result is None:
            return EMPTY
        return Transformed(result)

    return pipeline
