from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message, shown to the app user as-is
        details: optional mapping with extra context (field errors, ids)
        code: optional machine-readable error code
        http_status: HTTP status code used by the API error handlers
    """

    http_status = 500
    default_message = "Unexpected error"
    default_code = "APP_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition is not met (400)."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(AppError):
    """Raised when the caller is not authenticated (401)."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    """Raised when an authenticated user lacks the required role (403)."""

    http_status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"


class NotFoundError(AppError):
    """Raised when a requested resource was not found (404)."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(AppError):
    """Raised when a resource conflict occurs, e.g. a duplicate entry (409)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class ExternalServiceError(AppError):
    """Raised when the hosted auth provider or another upstream call fails (502)."""

    http_status = 502
    default_message = "Upstream service unavailable"
    default_code = "EXTERNAL_SERVICE_ERROR"
