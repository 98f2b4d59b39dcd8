"""Mapping of application errors to JSON error responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.application.errors import (
    AdminUnauthorizedError,
    AlreadySubmittedError,
    ConsultationError,
    ConsultationNotFoundError,
    InvalidPaymentSessionError,
    MissingFieldsError,
    NotYetSubmittedError,
    PaymentNotVerifiedError,
    PersistenceError,
)
from app.application.use_cases.user_messages_fr import UserMessagesFR
from app.infrastructure.logging.logger import log_event

_STATUS_BY_ERROR: dict[type[ConsultationError], int] = {
    MissingFieldsError: status.HTTP_400_BAD_REQUEST,
    AlreadySubmittedError: status.HTTP_400_BAD_REQUEST,
    NotYetSubmittedError: status.HTTP_400_BAD_REQUEST,
    AdminUnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    PaymentNotVerifiedError: status.HTTP_403_FORBIDDEN,
    InvalidPaymentSessionError: status.HTTP_403_FORBIDDEN,
    ConsultationNotFoundError: status.HTTP_404_NOT_FOUND,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(error: ConsultationError) -> int:
    """
    Get the HTTP status code for an application error.

    Args:
        error: Application error

    Returns:
        HTTP status code (500 for unmapped errors)
    """
    for error_type in type(error).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def consultation_error_handler(request: Request, exc: ConsultationError) -> JSONResponse:
    """Render an application error as {"error": message}."""
    status_code = status_code_for(exc)
    log_event(
        component="http",
        event="request_failed",
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies as a localized 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": UserMessagesFR.INVALID_REQUEST},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the JSON error handlers on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(ConsultationError, consultation_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
