"""Error taxonomy shared by the transport and the application layer."""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a failed operation."""

    TRANSPORT = "transport"    # connectivity, timeout, malformed response
    AUTH = "auth"              # bad credentials, expired or missing token
    VALIDATION = "validation"  # local field checks, never sent
    BUSINESS = "business"      # service rejected a well-formed request


class AirportAPIError(Exception):
    """Base class for every failure surfaced by the airport client."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(AirportAPIError):
    kind = ErrorKind.TRANSPORT


class AuthError(AirportAPIError):
    kind = ErrorKind.AUTH


class ValidationError(AirportAPIError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class BusinessError(AirportAPIError):
    kind = ErrorKind.BUSINESS


class InvalidStateError(Exception):
    """Raised when a workflow operation is not allowed in its current state."""


_ERRORS_BY_KIND = {
    ErrorKind.TRANSPORT: TransportError,
    ErrorKind.AUTH: AuthError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.BUSINESS: BusinessError,
}


def error_for_kind(kind: ErrorKind, message: str, status_code: Optional[int] = None) -> AirportAPIError:
    """Build the exception matching an error kind."""
    if kind == ErrorKind.VALIDATION:
        return ValidationError(message)
    return _ERRORS_BY_KIND[kind](message, status_code=status_code)
