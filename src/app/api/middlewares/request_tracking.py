"""Request tracking middleware for graceful shutdown."""

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.app.core.shutdown import request_tracker

_UNTRACKED_PREFIXES = ("/health", "/metrics")


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Count in-flight API requests so shutdown can drain them."""
    if request.url.path.startswith(_UNTRACKED_PREFIXES):
        return await call_next(request)

    async with request_tracker.track_request():
        return await call_next(request)
