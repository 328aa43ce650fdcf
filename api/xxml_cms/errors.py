"""
Service error taxonomy.

Services raise these; the HTTP layer renders them into the error envelope
with the matching status code.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced to callers."""

    code = "SERVICE_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def field(self) -> str | None:
        return None


class Unauthenticated(ServiceError):
    """No caller identity is present."""

    code = "UNAUTHENTICATED"
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class Forbidden(ServiceError):
    """The caller is known but not allowed to perform the operation."""

    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You don't have permission to access this resource"):
        super().__init__(message)


class NotFound(ServiceError):
    """The referenced resource does not exist."""

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ValidationFailed(ServiceError):
    """Input failed a length, emptiness or membership check."""

    code = "VALIDATION_ERROR"
    status_code = 422

    def __init__(self, field: str | None, reason: str):
        self._field = field
        self.reason = reason
        super().__init__(reason)

    @property
    def field(self) -> str | None:
        return self._field


class WrongPostType(ServiceError):
    """A type-specific operation targeted a post of another type."""

    code = "WRONG_POST_TYPE"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "This is not a blog post"):
        super().__init__(message)


class StoreFailure(ServiceError):
    """The persistence layer raised an error."""

    code = "STORE_FAILURE"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "The data store rejected the operation", detail: str | None = None):
        self.detail = detail
        super().__init__(f"{message} ({detail})" if detail else message)
