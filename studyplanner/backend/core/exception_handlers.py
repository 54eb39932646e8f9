"""
Exception Handlers.

Every failure leaves the API in the ErrorResponse envelope:

    ApplicationError        status from EXCEPTION_STATUS_MAP, code from the exception
    RequestValidationError  422 VAL_REQUEST_INVALID with one entry per bad field
    anything else           500 SYS_INTERNAL_ERROR, details only in the log

401 responses carry ``WWW-Authenticate: Bearer``.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from studyplanner.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from studyplanner.backend.core.logging import get_logger
from studyplanner.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    DatabaseError: 503,
}


def _get_request_id(request: Request) -> str | None:
    """Id set by RequestContextMiddleware, else the raw header."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get("x-request-id")


def _where(request: Request) -> dict[str, Any]:
    return {"path": request.url.path, "method": request.method}


def _envelope(request: Request, status_code: int, error: ErrorDetail) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers={"WWW-Authenticate": "Bearer"} if status_code == 401 else None,
    )


def _field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in errors
    ]


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Server error" if status_code >= 500 else "Client error",
        extra={"code": exc.code, "message": exc.message, "status": status_code, **_where(request)},
    )

    error = ErrorDetail(code=exc.code, message=exc.message)
    if isinstance(exc, ValidationError) and exc.details:
        error.details = exc.details
    return _envelope(request, status_code, error)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = _field_errors(exc.errors())
    logger.warning(
        "Request validation failed",
        extra={"error_count": len(field_errors), **_where(request)},
    )
    return _envelope(
        request,
        422,
        ErrorDetail(
            code="VAL_REQUEST_INVALID",
            message="Request validation failed",
            details={"validation_errors": field_errors},
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_where(request)},
    )
    return _envelope(
        request,
        500,
        ErrorDetail(code="SYS_INTERNAL_ERROR", message="An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
