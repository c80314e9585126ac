import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = {"/health"}


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs its outcome.

    A client-supplied X-Request-ID is reused so errors can be traced across
    services; the id is stored on request.state for the exception handlers.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        method, path = request.method, request.url.path
        client = request.client.host if request.client else None
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"[{request_id}] {method} {path} - ERROR",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "client": client,
                    "duration_ms": _elapsed_ms(started),
                    "error": str(exc),
                }
            )
            raise

        duration_ms = _elapsed_ms(started)
        if response.status_code >= 400:
            log_level = logging.WARNING
        elif path in QUIET_PATHS:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO
        logger.log(
            log_level,
            f"[{request_id}] {method} {path} - {response.status_code} ({duration_ms}ms)",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "client": client,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
