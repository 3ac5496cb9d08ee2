# slotify/utils/errors.py
"""
Typed application errors.
Services raise these; main.py maps them to HTTP responses of the form
{"error": <code>, "message": <message>}.
"""

from fastapi import status


class AppError(Exception):
    """Base class for all expected, caller-facing failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class NotFoundError(AppError):
    """Referenced entity does not exist or is soft-deleted."""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(AppError):
    """A uniqueness or exclusivity rule would be violated."""
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class BadRequestError(AppError):
    """A precondition on the current entity state does not hold."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
