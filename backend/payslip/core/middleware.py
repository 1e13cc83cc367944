import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from payslip.core.logging import bind_request_context, get_logger

logger = get_logger("payslip.request")


def client_ip(request: Request) -> str:
    return getattr(request.state, "request_ip", None) or (request.client.host if request.client else "")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log it once the response is ready."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        request.state.request_ip = request.client.host if request.client else ""
        bind_request_context(request_id, request.state.request_ip)

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
