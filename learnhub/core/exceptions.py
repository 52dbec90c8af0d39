"""Application-wide exception classes and handlers.

This module provides a consistent exception hierarchy for the application
and registers global exception handlers with FastAPI. Services raise these
errors; routes never translate them by hand.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for application errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(AppError):
    """Resource not found error (404)."""

    def __init__(self, message: str = "Resource not found", resource: str | None = None):
        details = {"resource": resource} if resource else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details=details,
        )


class ValidationError(AppError):
    """Validation error (400)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: str | None = None,
        error_code: str = "VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        merged = {"field": field} if field else {}
        merged.update(details or {})
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            details=merged,
        )


class ConflictError(AppError):
    """Resource conflict error (409)."""

    def __init__(
        self,
        message: str = "Resource conflict",
        resource: str | None = None,
        error_code: str = "CONFLICT",
    ):
        details = {"resource": resource} if resource else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code=error_code,
            details=details,
        )


class UnauthorizedError(AppError):
    """Authentication required error (401)."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="UNAUTHORIZED",
        )


class ForbiddenError(AppError):
    """Access forbidden error (403).

    Raised when the caller has the right role but the wrong relationship
    to the resource (not the owner, not enrolled).
    """

    def __init__(self, message: str = "Access denied", error_code: str = "FORBIDDEN"):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code=error_code,
        )


class ForbiddenRoleError(ForbiddenError):
    """The caller's role may not perform the operation at all (403)."""

    def __init__(self, message: str = "Your role does not allow this operation"):
        super().__init__(message=message, error_code="FORBIDDEN_ROLE")


class StorageUnavailableError(AppError):
    """The database could not be reached (503)."""

    def __init__(self, message: str = "Storage is temporarily unavailable"):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="STORAGE_UNAVAILABLE",
        )


# Enrollment and promo errors


class CourseUnavailableError(ValidationError):
    def __init__(self, message: str = "This course is not available for subscription"):
        super().__init__(message=message, error_code="COURSE_UNAVAILABLE")


class SelfEnrollmentError(ValidationError):
    def __init__(self, message: str = "You cannot subscribe to your own course"):
        super().__init__(message=message, error_code="SELF_ENROLLMENT")


class AlreadyEnrolledError(ConflictError):
    def __init__(self, message: str = "You are already subscribed to this course"):
        super().__init__(message=message, resource="enrollment", error_code="ALREADY_ENROLLED")


class PromoRequiredError(ValidationError):
    def __init__(
        self, original_price: float, message: str = "Promo code is required for paid courses"
    ):
        super().__init__(
            message=message,
            field="promo_code",
            error_code="PROMO_REQUIRED",
            details={"original_price": original_price},
        )


class InvalidPromoCodeError(ValidationError):
    def __init__(self, message: str = "Invalid promo code"):
        super().__init__(message=message, field="promo_code", error_code="INVALID_PROMO_CODE")


class MissingCodeError(ValidationError):
    def __init__(self, message: str = "Promo code is required"):
        super().__init__(message=message, field="promo_code", error_code="MISSING_CODE")


class NotRemovableError(ValidationError):
    def __init__(
        self,
        message: str = (
            "Only free course subscriptions can be removed. "
            "Paid courses cannot be unsubscribed."
        ),
    ):
        super().__init__(message=message, error_code="NOT_REMOVABLE")


def _error_response(
    status_code: int, code: str, message: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {"code": code, "message": message, "details": details or None},
        },
    )


async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as the standard error envelope.

    Client errors are expected traffic and logged at info; 5xx at error.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.error_code,
        exc.message,
        extra={"details": exc.details},
    )
    return _error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request input as a 400 VALIDATION_ERROR."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    logger.info("%s %s -> 400 VALIDATION_ERROR: %s", request.method, request.url.path, errors)
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Validation failed", {"errors": errors}
    )


async def storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render lost database connectivity as StorageUnavailable."""
    logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc)
    return await app_exception_handler(request, StorageUnavailableError())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", str(exc))
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "An unexpected error occurred"
    )


def register_exception_handlers(app: FastAPI, *, debug: bool = False) -> None:
    """Register exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
        debug: If True, unhandled exceptions propagate with stack traces.
    """
    app.add_exception_handler(AppError, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(OperationalError, storage_exception_handler)
    app.add_exception_handler(InterfaceError, storage_exception_handler)
    if not debug:
        app.add_exception_handler(Exception, unhandled_exception_handler)
