import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Health checks hit these constantly; their completions are logged at DEBUG only
QUIET_PATHS = frozenset({"/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with a correlation id and log how it ended.

    The id comes from the caller's ``X-Request-ID`` header when present,
    otherwise a fresh UUID. Exception handlers read it back from
    ``request.state.request_id`` so error bodies carry the same id.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": _elapsed_ms(started),
                    "error": str(e),
                },
                exc_info=True,
            )
            raise

        duration = _elapsed_ms(started)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(duration)

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        logger.log(
            level,
            "Request completed",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": duration,
            },
        )
        return response
