# shopcart/domain/errors.py
"""
Exceptions raised by the services. Each one carries a stable kind that the
API layer turns into a status code and a `{"error", "message"}` body.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_STATE = "invalid_state"
    INTERNAL = "internal"


HTTP_STATUS = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INVALID_STATE: 422,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """Base exception for service operations"""
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


class InvalidArgumentError(ServiceError):
    kind = ErrorKind.INVALID_ARGUMENT


class UnauthenticatedError(ServiceError):
    """
    Raised for any missing, malformed, expired or revoked credential.
    The specific cause stays in `reason` and is only logged.
    """
    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, reason: str = "invalid", message: str = "Authentication required"):
        self.reason = reason
        super().__init__(message)


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class InvalidStateError(ServiceError):
    kind = ErrorKind.INVALID_STATE


class InternalError(ServiceError):
    kind = ErrorKind.INTERNAL
