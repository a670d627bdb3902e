"""Custom exceptions and error handling utilities."""
from fastapi import HTTPException, status
from typing import Optional


class AppException(Exception):
    """Base exception for application errors."""
    pass


class NotFoundError(AppException):
    """Raised when a resource is not found."""

    def __init__(self, resource: str, identifier: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} not found"
        if identifier:
            message += f": {identifier}"
        super().__init__(message)


class ValidationError(AppException):
    """Raised when validation fails."""
    pass


class ConfigurationError(AppException):
    """Raised at startup when required configuration is missing or inconsistent."""
    pass


def handle_database_error(error: Exception, operation: str) -> HTTPException:
    """
    Convert database errors to HTTP exceptions.

    The underlying message is forwarded to the caller unchanged.

    Args:
        error: The database error
        operation: Description of the operation that failed

    Returns:
        HTTPException with appropriate status code
    """
    error_message = str(error)

    if "duplicate" in error_message.lower() or "unique" in error_message.lower():
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Resource already exists: {operation}",
        )

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Database error during {operation}: {error_message}",
    )


def forbidden_error(message: str = "Access denied") -> HTTPException:
    """Create a standardized 403 forbidden error."""
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)


def upstream_error(message: str) -> HTTPException:
    """Create a 502 error for failures reported by an external service."""
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)
