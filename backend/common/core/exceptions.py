from typing import Any, Dict


class AppException(Exception):
    """Base application exception.

    Carries a human readable message plus structured details that routes
    can pass through to the client or logs.
    """

    def __init__(self, message: str = "", **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details


class NotFoundError(AppException):
    """Resource not found exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class StorageError(AppException):
    """Storage operation error exception."""

    pass


class ProcessingError(AppException):
    """Processing error exception."""

    pass


class UnavailableError(AppException):
    """A dependency is temporarily unable to serve the request."""

    pass
