"""
Application error taxonomy.

Services raise these; the handlers registered in ``medibook.main`` turn them
into the ``{"success": false, "message": ...}`` envelope.
"""
from typing import Optional

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    default_message = "Please fill in all required fields"


class DuplicateUser(AppError):
    default_message = "User already registered"


class InvalidCredentials(AppError):
    default_message = "Invalid email or password"


class RoleMismatch(AppError):
    default_message = "User with this role not found"


class Unauthenticated(AppError):
    default_message = "User not authenticated"


class InvalidToken(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized for this resource"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class DoctorNotFound(NotFound):
    default_message = "Doctor not found"


class DoctorConflict(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Doctor conflict! Please contact through email or phone"


class TooManyRequests(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests. Please try again later."
