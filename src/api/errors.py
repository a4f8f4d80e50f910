"""
InstaVault - API Error System
=============================

Centralized error codes and exception handling for consistent API responses.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from src.core.constants import EXAMPLE_INSTAGRAM_URL


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Centralized error codes for the API.

    Format: CATEGORY_SPECIFIC_ERROR

    Categories:
    - VALIDATION: Input validation errors
    - ROUTE: Unknown endpoints
    - SERVER: Server-side errors
    """

    # Validation errors (400)
    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_INVALID_URL = "VALIDATION_INVALID_URL"

    # Routing errors (404)
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

    # Server errors (500)
    SERVER_ERROR = "SERVER_ERROR"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Request body must be JSON with an instagramUrl field",
    ErrorCode.VALIDATION_INVALID_URL: "Valid Instagram URL is required",
    ErrorCode.ROUTE_NOT_FOUND: "Endpoint not found",
    ErrorCode.SERVER_ERROR: "Server error",
}


# =============================================================================
# Default Status Codes
# =============================================================================

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_INVALID_URL: HTTP_400_BAD_REQUEST,
    ErrorCode.ROUTE_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_body(
    code: ErrorCode,
    message: str,
    details: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "error_code": code.value,
        "message": message,
        "details": details,
    }


# =============================================================================
# API Error Exception
# =============================================================================

class APIError(HTTPException):
    """
    Custom API exception with error codes.

    Usage:
        raise APIError(ErrorCode.VALIDATION_INVALID_URL)
        raise APIError(ErrorCode.VALIDATION_FAILED, details={"field": "instagramUrl"})
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")
        self.error_details = details

        # Use default status code if not provided
        if status_code is None:
            status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

        super().__init__(
            status_code=status_code,
            detail=_error_body(code, self.error_message, details),
            headers=headers,
        )

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=_error_body(self.error_code, self.error_message, self.error_details),
            headers=self.headers,
        )


# =============================================================================
# Helper Functions
# =============================================================================

def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Create a JSON error response without raising an exception.

    Useful for returning errors in exception handlers.
    """
    if status_code is None:
        status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status_code,
        content=_error_body(
            code,
            message or ERROR_MESSAGES.get(code, "An error occurred"),
            details,
        ),
    )


def invalid_url(message: Optional[str] = None) -> APIError:
    """Shorthand for a rejected instagramUrl."""
    return APIError(
        ErrorCode.VALIDATION_INVALID_URL,
        message=message,
        details={"example": EXAMPLE_INSTAGRAM_URL},
    )


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "APIError",
    "error_response",
    "invalid_url",
]
