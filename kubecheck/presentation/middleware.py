"""Request logging middleware."""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from kubecheck.shared import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every incoming request and the status code sent back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        logger.debug("http.server.request", method=request.method, path=path, direction="incoming")
        start_time = time.monotonic()

        response = await call_next(request)

        logger.debug(
            "http.server.response",
            method=request.method,
            path=path,
            status=response.status_code,
            direction="outgoing",
            duration_ms=round((time.monotonic() - start_time) * 1000, 2),
        )
        return response
