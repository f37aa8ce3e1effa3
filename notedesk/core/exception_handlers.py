"""
Exception Handlers.

Every failure a note request can hit ends up as an ErrorResponse
envelope; none of them take the process down.

    ApplicationError      -> status from EXCEPTION_STATUS_MAP, else 500
    RequestValidationError -> 422 VAL_REQUEST_INVALID
    HTTPException         -> its own status (unknown route, readiness 503)
    anything else         -> 500 SYS_INTERNAL_ERROR, details hidden

Usage:
    from notedesk.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notedesk.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from notedesk.core.logging import get_logger
from notedesk.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
    DatabaseError: 503,
}

# Codes for HTTPExceptions raised by routing or by our own endpoints
HTTP_STATUS_CODES: dict[int, str] = {
    404: "RES_NOT_FOUND",
    405: "VAL_METHOD_NOT_ALLOWED",
    503: "SYS_UNAVAILABLE",
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _request_context(request: Request) -> dict[str, Any]:
    """Fields every handler logs: where the request went and which note."""
    context: dict[str, Any] = {
        "path": request.url.path,
        "method": request.method,
    }
    note_id = request.path_params.get("note_id")
    if note_id is not None:
        context["note_id"] = note_id
    request_id = _get_request_id(request)
    if request_id:
        context["request_id"] = request_id
    return context


def _error_response(
    request: Request,
    status_code: int,
    error: ErrorDetail,
) -> JSONResponse:
    response = ErrorResponse(
        error=error,
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    Store faults (DatabaseError) log at error level; caller mistakes
    such as a bad note id or a missing note log as warnings.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        **_request_context(request),
    }

    if status_code >= 500:
        logger.error("Note operation failed", extra=log_extra)
    else:
        logger.warning("Note request rejected", extra=log_extra)

    error = ErrorDetail(code=exc.code, message=exc.message)
    if isinstance(exc, ValidationError) and exc.details:
        error.details = exc.details

    return _error_response(request, status_code, error)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request validation errors.

    Each entry names the offending field as a dotted location, e.g.
    ``body.id`` for a float id sent to save.
    """
    errors = exc.errors()
    details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", "Validation error"),
                "type": err.get("type", "unknown"),
            }
            for err in errors
        ]
    }

    logger.warning(
        "Request validation failed",
        extra={"error_count": len(errors), **_request_context(request)},
    )

    return _error_response(
        request,
        422,
        ErrorDetail(
            code="VAL_REQUEST_INVALID",
            message="Request validation failed",
            details=details,
        ),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """
    Handle HTTPExceptions from routing and from the health endpoints.

    A dict detail (the readiness report) is passed through as details.
    """
    code = HTTP_STATUS_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")

    if isinstance(exc.detail, dict):
        error = ErrorDetail(code=code, message="Service unavailable", details=exc.detail)
    else:
        error = ErrorDetail(code=code, message=str(exc.detail))

    logger.warning(
        "HTTP error",
        extra={"status": exc.status_code, "code": code, **_request_context(request)},
    )

    response = _error_response(request, exc.status_code, error)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs the full traceback and returns a generic error response.
    """
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_request_context(request)},
    )

    return _error_response(
        request,
        500,
        ErrorDetail(code="SYS_INTERNAL_ERROR", message="An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
