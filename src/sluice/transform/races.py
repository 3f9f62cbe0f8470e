"""Optimizer-race failures.

While the dependency optimizer rebuilds its bundles, the pipeline can
report that an optimized dep is outdated or that waiting for the
optimizer timed out. Both resolve themselves once the optimizer
settles, so the client gets a bare 504 and is expected to retry.
"""

import logging

from sluice.errors import PipelineError, PipelineErrorKind
from sluice.http.request import Request
from sluice.http.response import Handled, Response

logger = logging.getLogger("sluice.server")


def race_response(request: Request, error: PipelineError) -> Response | Handled:
    """Answer a transient optimizer failure; re-raise anything else.

    Raises:
        PipelineError: *error* itself, unchanged, when it is not a race.
    """
    match error.kind:
        case PipelineErrorKind.OUTDATED_OPTIMIZATION | PipelineErrorKind.OPTIMIZATION_TIMEOUT:
            logger.error(error.message)
            if request.response_finalized:
                return Handled(reason=error.code)
            return Response(body="", status=504)
        case _:
            raise error
