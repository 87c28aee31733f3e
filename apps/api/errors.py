"""Exception handlers rendering domain failures as JSON error bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.domain.exceptions import (
    DomainError,
    DomainValidationError,
    ForbiddenError,
    InsufficientFundError,
    MismatchMerchantError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    MismatchMerchantError: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InsufficientFundError: status.HTTP_402_PAYMENT_REQUIRED,
    DomainValidationError: status.HTTP_422_UNPROCESSABLE_CONTENT,
}


def status_code_for(exc: DomainError) -> int:
    for error_type, code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Handle domain failures.

    Args:
        request: FastAPI request
        exc: DomainError raised by a service

    Returns:
        JSONResponse with ``type`` and ``message``
    """
    code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {code} {exc.type}: {exc.message}")
    return JSONResponse(
        status_code=code,
        content={"type": exc.type, "message": exc.message},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies and parameters."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "type": "ValidationError",
            "message": "request validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions.

    Args:
        request: FastAPI request
        exc: Exception

    Returns:
        JSONResponse with error details
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)
