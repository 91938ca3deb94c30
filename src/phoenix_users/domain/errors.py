"""Error taxonomy for the Phoenix user API."""

from dataclasses import dataclass, field
from enum import Enum


class ApiErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the user API client."""

    CONNECTION = "connection"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PROTOCOL = "protocol"


@dataclass(eq=False)
class UserApiError(Exception):
    """Base error raised by user API operations.

    Callers can branch on ``kind`` instead of catching individual subclasses.
    """

    message: str
    kind: ApiErrorKind = ApiErrorKind.CONNECTION
    status_code: int | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ApiConnectionError(UserApiError):
    """The API could not be reached or answered with an unexpected status."""

    def __init__(
        self,
        message: str = "Could not connect to the API",
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message=message, kind=ApiErrorKind.CONNECTION, status_code=status_code
        )


class ProtocolError(ApiConnectionError):
    """A successful response did not carry the expected envelope."""

    def __init__(
        self,
        message: str = "Invalid response format from API",
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.kind = ApiErrorKind.PROTOCOL


class NotFoundError(UserApiError):
    """The requested user does not exist upstream."""

    def __init__(self, message: str = "The requested resource was not found") -> None:
        super().__init__(message=message, kind=ApiErrorKind.NOT_FOUND, status_code=404)


class ValidationError(UserApiError):
    """The submitted user was rejected, with messages per wire field."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, list[str]] | None = None,
        *,
        status_code: int | None = 422,
    ) -> None:
        super().__init__(
            message=message,
            kind=ApiErrorKind.VALIDATION,
            status_code=status_code,
            field_errors=dict(field_errors or {}),
        )
