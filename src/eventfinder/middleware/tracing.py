"""
Trace ID propagation and per-request access logging
"""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from eventfinder.core.logging_config import generate_trace_id, set_trace_id
from eventfinder.core.metrics import observe_request

logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-ID"


def _route_template(request: Request) -> str:
    # "/api/v1/events/{event_id}" rather than the concrete path
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class TracingMiddleware(BaseHTTPMiddleware):
    """Tag each request with a trace ID, echo it back and record timing"""

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_HEADER) or generate_trace_id()
        set_trace_id(trace_id)

        context = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
        }
        logger.info(f"→ {request.method} {request.url.path}", extra=context)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.perf_counter() - started
            observe_request(request.method, _route_template(request), 500, elapsed)
            logger.error(
                f"✗ {request.method} {request.url.path} raised {type(e).__name__}",
                extra={**context, "duration_ms": round(elapsed * 1000, 2), "error": str(e)},
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        observe_request(request.method, _route_template(request), response.status_code, elapsed)
        logger.info(
            f"← {request.method} {request.url.path} {response.status_code}",
            extra={**context, "status_code": response.status_code, "duration_ms": round(elapsed * 1000, 2)},
        )

        response.headers[TRACE_HEADER] = trace_id
        return response
