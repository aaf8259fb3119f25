"""Authenticated client for the Fitbit Web API."""

from __future__ import annotations

from .client import FitbitClient
from .config import DEFAULT_USER_ID, FITBIT_API_BASE, ClientConfig
from .connection import Connection
from .dates import format_date, format_time, require_end_date, require_start_date
from .dispatch import RequestDispatcher
from .errors import (
    ApiLimitError,
    BadRequestError,
    ErrorKind,
    FitbitAPIError,
    FitbitHTTPError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidDateArgument,
    InvalidTimeArgument,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .interpret import RateLimitInfo, classify_status, interpret

__all__ = [
    "DEFAULT_USER_ID",
    "FITBIT_API_BASE",
    "ApiLimitError",
    "BadRequestError",
    "ClientConfig",
    "Connection",
    "ErrorKind",
    "FitbitAPIError",
    "FitbitClient",
    "FitbitHTTPError",
    "ForbiddenError",
    "InvalidArgumentError",
    "InvalidDateArgument",
    "InvalidTimeArgument",
    "NotFoundError",
    "RateLimitInfo",
    "RequestDispatcher",
    "ServerError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "classify_status",
    "format_date",
    "format_time",
    "interpret",
    "require_end_date",
    "require_start_date",
]
