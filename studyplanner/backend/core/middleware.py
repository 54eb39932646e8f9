"""
Request Context Middleware.

Per request:
    request.state.request_id   X-Request-ID header, or a fresh uuid4
    request.state.source       X-Frontend-ID header if listed in VALID_SOURCES, else "unknown"
    request.state.start_time   naive UTC

The same values are bound into structlog contextvars for the lifetime of
the request, and the response gets X-Request-ID and X-Response-Time.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from studyplanner.backend.core.logging import VALID_SOURCES, get_logger
from studyplanner.backend.core.utils import utc_now

logger = get_logger(__name__)


def _source_of(request: Request) -> str:
    source = request.headers.get("X-Frontend-ID", "unknown").lower()
    return source if source in VALID_SOURCES else "unknown"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id and a source for logging.

    Args:
        log_level: level used for the "Request started/completed" lines.
            Failures are always logged at ERROR.
    """

    def __init__(self, app, log_level: str = "debug") -> None:
        super().__init__(app)
        self._log_level = log_level

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        source = _source_of(request)

        request.state.request_id = request_id
        request.state.source = source
        request.state.start_time = utc_now()
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source=source,
            method=request.method,
            path=request.url.path,
        )

        log = getattr(logger, self._log_level)
        log(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            log(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
