"""
Error types raised by the service layer.

Every error carries a stable ``code`` and the HTTP status it maps to.
The application registers a single exception handler (see ``main``)
that renders these errors into the ``{"success": false, ...}``
envelope, so services never deal with HTTP directly.
"""

from typing import Any, Dict, Optional


class AppBaseError(Exception):
    """Base exception for all application errors."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


class UnauthenticatedError(AppBaseError):
    """Raised when no actor is attached to the request."""

    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "You must be signed in to perform this action."):
        super().__init__(message)


class NotFoundError(AppBaseError):
    """Raised when a referenced event, task or guest does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(AppBaseError):
    """Raised when the actor does not own the event, or a child record
    belongs to a different event than the one authorized."""

    code = "FORBIDDEN"
    status_code = 403


class InputValidationError(AppBaseError):
    """Raised for incomplete input, e.g. an update without any field."""

    code = "BAD_REQUEST"
    status_code = 400
