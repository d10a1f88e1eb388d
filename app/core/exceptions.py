"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


# Module logger
logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides a consistent ``{"error": message, "code": code}`` response body
    across the entire API.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404)
        raise AppException("Bid must be higher than current highest (10)", "BID_TOO_LOW")

    Error Codes:
        Validation (400):
            - MISSING_FIELDS
            - INVALID_INPUT
            - INVALID_AMOUNT
            - INVALID_PRODUCT_ID

        Authentication:
            - UNAUTHENTICATED (401)
            - INVALID_CREDENTIALS (400)
            - EMAIL_EXISTS (400)

        Bidding:
            - PRODUCT_NOT_FOUND (404)
            - BID_TOO_LOW (400)
            - BID_CONFLICT (409)

        General:
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional, never sent to clients)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.message,
            "code": self.code,
        }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to a JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Convert FastAPI request validation errors to 400 responses.

    Missing attributes map to MISSING_FIELDS; anything else (wrong JSON type,
    malformed body) maps to INVALID_INPUT.
    """
    errors = exc.errors()
    if any(error.get("type") == "missing" for error in errors):
        error = missing_fields()
    else:
        error = invalid_input()

    logger.debug(f"Request validation failed on {request.url.path}: {errors}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and answer with a generic message."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = internal_error()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def missing_fields() -> AppException:
    """Create missing fields exception."""
    return AppException("Missing fields", "MISSING_FIELDS", 400)


def invalid_input(message: str = "Invalid input") -> AppException:
    """Create invalid input exception."""
    return AppException(message, "INVALID_INPUT", 400)


def invalid_amount() -> AppException:
    """Create invalid bid amount exception."""
    return AppException("Invalid bid amount", "INVALID_AMOUNT", 400)


def invalid_product_id(raw: Optional[str] = None) -> AppException:
    """Create invalid product id exception."""
    details = {"product_id": raw} if raw is not None else {}
    return AppException("Invalid product id", "INVALID_PRODUCT_ID", 400, details)


def unauthenticated() -> AppException:
    """Create unauthenticated exception."""
    return AppException("Unauthorized", "UNAUTHENTICATED", 401)


def invalid_credentials() -> AppException:
    """Create invalid credentials exception."""
    return AppException("Invalid credentials", "INVALID_CREDENTIALS", 400)


def email_exists(email: str) -> AppException:
    """Create email already registered exception."""
    return AppException("Email already in use", "EMAIL_EXISTS", 400, {"email": email})


def product_not_found(product_id: Optional[int] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id is not None else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def bid_too_low(current_highest: str) -> AppException:
    """Create bid too low exception."""
    return AppException(
        f"Bid must be higher than current highest ({current_highest})",
        "BID_TOO_LOW",
        400,
        {"current_highest": current_highest}
    )


def bid_conflict() -> AppException:
    """Create concurrent bid conflict exception."""
    return AppException(
        "Another bid was placed at the same time, please retry",
        "BID_CONFLICT",
        409
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
