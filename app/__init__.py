"""
App package - configuration and the service error hierarchy.
"""

from app.config import settings
from app.exceptions import (
    AppError,
    ServiceValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    ExternalServiceError,
)

__all__ = [
    "settings",
    "AppError",
    "ServiceValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ExternalServiceError",
]
