from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import CustomHTTPException
from app.schemas.response import ErrorResponse, ErrorDetail
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
        501: "NOT_IMPLEMENTED",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    request_id = _request_id(request)
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
        request_id=request_id
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_response.model_dump(exclude_none=True)),
        headers={"X-Request-ID": request_id}
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[{_request_id(request)}] Validation error: {exc.errors()}")
    return _error_response(
        request,
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        details={"validation_errors": exc.errors()}
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, CustomHTTPException):
        code, details = exc.error_code, exc.details
    else:
        code, details = _get_error_code(exc.status_code), None

    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    logger.warning(f"[{_request_id(request)}] HTTP {exc.status_code}: {message}")
    return _error_response(request, exc.status_code, code, message, details=details)

async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"[{_request_id(request)}] Integrity error: {exc.orig}")
    return _error_response(request, 409, "CONFLICT", "Resource already exists")

async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[{_request_id(request)}] Unhandled exception: {exc}", exc_info=True)
    return _error_response(request, 500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")
