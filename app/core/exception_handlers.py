"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error body has the
same shape: {"error", "message", "details"?, "request_id"} so the cron
caller can quote the request ID when reporting a failed tick.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import RenoTimelineException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Domain error_code -> HTTP status; anything unlisted is a 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "VALIDATION_ERROR": 400,
    "UNSUPPORTED_ACTION": 422,
    "INVALID_ACTION_CONFIG": 422,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_response(request: Request, status_code: int, body: dict[str, Any]) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _renotimeline_exception_handler(
    request: Request, exc: RenoTimelineException
) -> JSONResponse:
    """Map a domain exception to its status code; body is exc.to_dict()."""
    status_code = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status_code == 401:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    elif status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(request, status_code, exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        request,
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(
        request, exc.status_code, {"error": "HTTP_ERROR", "message": exc.detail}
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; the exception text is only exposed when debug is True."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(request, 500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app. Call once in create_app()."""
    app.add_exception_handler(RenoTimelineException, _renotimeline_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
