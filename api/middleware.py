"""
Consolidated middleware for the FitnessHub API
"""

import time
import logging
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import AppError
from domain.helpers import utcnow

logger = logging.getLogger("fitnesshub.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    elif isinstance(obj, Exception):
        return str(obj)
    return obj


def error_envelope(status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": utcnow().isoformat(),
        },
    )


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs its outcome and duration"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            f"request_started request_id={request_id} method={request.method} "
            f"path={request.url.path} client={request.client.host if request.client else None}"
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                f"request_failed request_id={request_id} method={request.method} "
                f"path={request.url.path} error={str(exc)} process_time={process_time:.4f}s",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"request_completed request_id={request_id} method={request.method} "
            f"path={request.url.path} status={response.status_code} "
            f"process_time={process_time:.4f}s"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    return error_envelope(
        status.HTTP_422_UNPROCESSABLE_CONTENT,
        {
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": make_serializable(exc.errors()),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return error_envelope(
        exc.status_code,
        {"code": f"HTTP_{exc.status_code}", "message": exc.detail},
    )


async def app_error_handler(request: Request, exc: AppError):
    """Map service layer errors to their HTTP status"""
    if exc.http_status >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")

    return error_envelope(exc.http_status, exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url.path}: {str(exc)}")

    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "code": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred",
        },
    )
