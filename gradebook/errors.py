"""
gradebook/errors.py
Centralized error rendering for the HTTP surface

ERROR RESPONSE STRUCTURE:
{
    "success": false,
    "error": "ErrorType",
    "message": "Human-readable description",
    "code": "UNIQUE_ERROR_CODE",
    "details": {} (optional)
}

HTTP STATUS CODE DISCIPLINE:
- 400: Malformed learner/course id
- 401: No learner identity could be resolved
- 503: A collaborator failed or timed out (retryable)
- 504: The whole report exceeded its time budget (retryable)
- 500: Never caused by user input
"""
import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from gradebook.exceptions import (
    AuthRequiredError,
    GradebookException,
    InvalidIdentifierError,
    ReportTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class ErrorCode:
    """Unique error codes for machine-readable error handling"""

    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    REPORT_TIMEOUT = "REPORT_TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response model"""
    success: bool = False
    error: str
    message: str
    code: str
    details: Optional[Dict[str, Any]] = None


def to_error_response(exc: GradebookException) -> ErrorResponse:
    if isinstance(exc, InvalidIdentifierError):
        return ErrorResponse(
            error="Bad Request",
            message=exc.message,
            code=ErrorCode.INVALID_IDENTIFIER,
            details={"field": exc.field},
        )
    if isinstance(exc, ReportTimeoutError):
        return ErrorResponse(
            error="Gateway Timeout",
            message="Report took too long to compute. Please retry.",
            code=ErrorCode.REPORT_TIMEOUT,
            details={"timeout_seconds": exc.timeout_seconds},
        )
    if isinstance(exc, UpstreamUnavailableError):
        return ErrorResponse(
            error="Service Unavailable",
            message="A data source is temporarily unavailable. Please retry.",
            code=ErrorCode.UPSTREAM_UNAVAILABLE,
            details=exc.to_details(),
        )
    if isinstance(exc, AuthRequiredError):
        return ErrorResponse(
            error="Unauthorized",
            message=exc.message,
            code=ErrorCode.AUTH_REQUIRED,
        )

    log_id = str(uuid.uuid4())[:8]
    logger.error(f"[{log_id}] Unmapped gradebook error: {type(exc).__name__}: {exc.message}")
    return ErrorResponse(
        error="Internal Error",
        message="An internal error occurred. Please try again later.",
        code=ErrorCode.INTERNAL_ERROR,
        details={"log_id": log_id},
    )


async def gradebook_exception_handler(request: Request, exc: GradebookException) -> JSONResponse:
    body = to_error_response(exc)
    status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GradebookException, gradebook_exception_handler)
