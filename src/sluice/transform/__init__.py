"""On-demand module transformation: request classification, source-map
sub-requests, conditional caching, dispatch, and optimizer-race handling.

The pieces run in a fixed order for every request; see
``sluice.middleware.transform.TransformMiddleware`` for the wiring.
"""

from sluice.transform.outcome import (
    EMPTY,
    Empty,
    Failed,
    TransformOutcome,
    TransformPipeline,
    TransformResult,
    Transformed,
    adapt_pipeline,
)

__all__ = [
    "EMPTY",
    "Empty",
    "Failed",
    "TransformOutcome",
    "TransformPipeline",
    "TransformResult",
    "Transformed",
    "adapt_pipeline",
]
