"""
Custom exceptions for the Uncovering History front-end service.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Backend collaborator errors
    BACKEND_NOT_CONFIGURED = "BACKEND_NOT_CONFIGURED"
    BACKEND_ERROR = "BACKEND_ERROR"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"

    # Authentication errors
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    MISSING_TOKEN = "MISSING_TOKEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Point errors
    INVALID_POINT = "INVALID_POINT"
    NOT_FOUND = "NOT_FOUND"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class HistoryMapException(Exception):
    """Base exception for the front-end service."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class BackendNotConfiguredError(HistoryMapException):
    """Raised when no backend base URL is configured."""

    def __init__(self):
        super().__init__(
            message="API URL not configured",
            error_code=ErrorCode.BACKEND_NOT_CONFIGURED,
            status_code=500
        )


class BackendError(HistoryMapException):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None):
        self.backend_message = message
        super().__init__(
            message=message or f"HTTP {status_code}",
            error_code=ErrorCode.NOT_FOUND if status_code == 404 else ErrorCode.BACKEND_ERROR,
            details=details or {"backend_status": status_code},
            status_code=status_code
        )


class BackendUnavailableError(HistoryMapException):
    """Raised when the backend cannot be reached."""

    def __init__(self, message: str = "Failed to fetch from backend", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.BACKEND_UNAVAILABLE,
            details=details,
            status_code=502
        )


class InvalidCredentialsError(HistoryMapException):
    """Raised when the backend rejects a login."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            error_code=ErrorCode.INVALID_CREDENTIALS,
            status_code=401
        )


class UnauthorizedError(HistoryMapException):
    """Raised when a user token is missing or rejected."""

    def __init__(self, message: str = "Unauthorized", error_code: ErrorCode = ErrorCode.UNAUTHORIZED):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=401
        )


class RegistrationConflictError(HistoryMapException):
    """Raised when registering an email that already exists."""

    def __init__(self, email: str):
        super().__init__(
            message="Email already registered",
            error_code=ErrorCode.ALREADY_EXISTS,
            details={"email": email},
            status_code=409
        )


class InvalidPointRecordError(HistoryMapException):
    """Raised when the backend returns a point that cannot be displayed."""

    def __init__(self, point_id: str, reason: str):
        super().__init__(
            message=f"Point {point_id} has invalid data",
            error_code=ErrorCode.INVALID_POINT,
            details={"point_id": point_id, "reason": reason},
            status_code=502
        )


class PointValidationError(HistoryMapException):
    """Raised when a point creation form fails validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_POINT,
            details={"field": field} if field else None,
            status_code=422
        )
