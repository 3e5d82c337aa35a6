"""Discriminated result returned by every remote operation."""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from airport_client.domain.errors import AirportAPIError, ErrorKind, error_for_kind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the decoded payload."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a human-readable message."""

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.to_exception()

    def to_exception(self) -> AirportAPIError:
        return error_for_kind(self.kind, self.message, self.status_code)

    @classmethod
    def from_exception(cls, error: AirportAPIError) -> "Err":
        return cls(kind=error.kind, message=error.message, status_code=error.status_code)


Result = Union[Ok[T], Err]
