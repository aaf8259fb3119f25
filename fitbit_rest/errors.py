"""Exception hierarchy for Fitbit API calls."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .interpret import RateLimitInfo


class ErrorKind(str, Enum):
    """Tag identifying which failure an error represents."""

    BAD_REQUEST = "BadRequest"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    API_LIMIT = "ApiLimit"
    SERVER_ERROR = "ServerError"
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_DATE = "InvalidDate"
    INVALID_TIME = "InvalidTime"
    UNEXPECTED = "Unexpected"


class FitbitAPIError(RuntimeError):
    """Raised when Fitbit API interactions fail."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class InvalidArgumentError(FitbitAPIError):
    kind = ErrorKind.INVALID_ARGUMENT


class InvalidDateArgument(FitbitAPIError):
    kind = ErrorKind.INVALID_DATE


class InvalidTimeArgument(FitbitAPIError):
    kind = ErrorKind.INVALID_TIME


class FitbitHTTPError(FitbitAPIError):
    """Base class for errors derived from the response status code."""

    default_message = "Fitbit API call failed"

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"{self.default_message} ({status_code})")
        self.status_code = status_code


class BadRequestError(FitbitHTTPError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(FitbitHTTPError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(FitbitHTTPError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(FitbitHTTPError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class ApiLimitError(FitbitHTTPError):
    """Raised on 429; carries whatever rate-limit headers came back."""

    kind = ErrorKind.API_LIMIT
    default_message = "Fitbit API rate limit exceeded"

    def __init__(
        self,
        status_code: int = 429,
        message: Optional[str] = None,
        *,
        rate_limit: Optional["RateLimitInfo"] = None,
    ) -> None:
        super().__init__(status_code, message)
        self.rate_limit = rate_limit


class ServerError(FitbitHTTPError):
    kind = ErrorKind.SERVER_ERROR
    default_message = "Fitbit server error"


class UnexpectedStatusError(FitbitHTTPError):
    kind = ErrorKind.UNEXPECTED

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(
            status_code, message or f"Unexpected response status {status_code}"
        )
