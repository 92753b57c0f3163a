"""
Domain errors raised by services and rendered by the handlers in app.main
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP response"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class InvalidStateError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_STATE"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
