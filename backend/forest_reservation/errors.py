"""
Exception handlers.

Every error leaves the API in the same envelope as a success,
``{"success": false, "data": null, "message": ...}``, with a Korean message
the booking UI can show as-is. Request validation failures are reported as
400 (the UI treats 422 as an unexpected error).
"""

import logging
from typing import Any, Dict, Optional, Sequence

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import messages
from .core.exceptions import DomainException, RepositoryException, is_db_pool_exhaustion
from .schemas.base_responses import error_envelope

logger = logging.getLogger(__name__)

# First failing field -> message shown to the user
_FIELD_MESSAGES: Dict[str, str] = {
    "date": messages.MSG_INVALID_DATE,
    "slot_date": messages.MSG_INVALID_DATE,
    "yearMonth": messages.MSG_INVALID_YEAR_MONTH,
    "year_month": messages.MSG_INVALID_YEAR_MONTH,
    "timeSlot": messages.MSG_INVALID_TIME_SLOT,
    "time_slot": messages.MSG_INVALID_TIME_SLOT,
    "capacity": messages.MSG_INVALID_CAPACITY,
    "email": messages.MSG_INVALID_EMAIL,
    "year": messages.MSG_INVALID_YEAR_MONTH,
    "month": messages.MSG_INVALID_YEAR_MONTH,
}

_STATUS_MESSAGES: Dict[int, str] = {
    401: messages.MSG_ADMIN_AUTH_REQUIRED,
    404: messages.MSG_NOT_FOUND,
    503: messages.MSG_SERVICE_UNAVAILABLE,
}


def _field_name(loc: Sequence[Any]) -> Optional[str]:
    # loc looks like ("body", "timeSlot") or ("path", "year_month")
    for part in reversed(loc):
        if isinstance(part, str) and part not in {"body", "query", "path", "header", "cookie"}:
            return part
    return None


def validation_message(errors: Sequence[Dict[str, Any]]) -> str:
    """Pick the user-facing message for a list of pydantic errors."""
    if not errors:
        return messages.MSG_VALIDATION_FAILED
    first = errors[0]
    if first.get("type") == "missing":
        return messages.MSG_REQUIRED_FIELDS_MISSING
    field = _field_name(first.get("loc", ()))
    if field in _FIELD_MESSAGES:
        return _FIELD_MESSAGES[field]
    if field:
        return f"{messages.MSG_VALIDATION_FAILED} ({field}: {first.get('msg', '')})"
    return messages.MSG_VALIDATION_FAILED


def _detail_message(detail: Any, status_code: int) -> str:
    if isinstance(detail, dict):
        message = detail.get("message") or detail.get("detail")
        if isinstance(message, str) and message:
            return message
    if isinstance(detail, str) and detail and status_code not in _STATUS_MESSAGES:
        return detail
    return _STATUS_MESSAGES.get(status_code, messages.MSG_INTERNAL_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Domain error",
            extra={
                "path": request.url.path,
                "code": exc.code,
                "status_code": exc.status_code,
                "details": exc.details,
            },
        )
        message = exc.message if exc.status_code < 500 else messages.MSG_INTERNAL_ERROR
        return JSONResponse(error_envelope(message), status_code=exc.status_code)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            error_envelope(_detail_message(exc.detail, exc.status_code)),
            status_code=exc.status_code,
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            error_envelope(_detail_message(exc.detail, exc.status_code)),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.info(
            "Request validation failed",
            extra={"path": request.url.path, "errors": [e.get("loc") for e in errors]},
        )
        return JSONResponse(error_envelope(validation_message(errors)), status_code=400)

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            error_envelope(validation_message(exc.errors())),
            status_code=400,
        )

    @app.exception_handler(RepositoryException)
    async def repository_exception_handler(
        request: Request, exc: RepositoryException
    ) -> JSONResponse:
        if is_db_pool_exhaustion(exc):
            logger.warning("Database pool exhausted", extra={"path": request.url.path})
            return JSONResponse(
                error_envelope(messages.MSG_SERVICE_UNAVAILABLE),
                status_code=503,
                headers={"Retry-After": "2"},
            )
        logger.error(f"Repository error on {request.url.path}: {str(exc)}")
        return JSONResponse(error_envelope(messages.MSG_INTERNAL_ERROR), status_code=500)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return JSONResponse(error_envelope(messages.MSG_INTERNAL_ERROR), status_code=500)
