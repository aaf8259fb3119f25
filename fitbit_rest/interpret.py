"""Turns raw API responses into results or typed errors."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, Union

import requests
import structlog

from .errors import (
    ApiLimitError,
    BadRequestError,
    FitbitHTTPError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
)

logger = structlog.get_logger(__name__)

RATE_LIMIT_HEADERS = (
    "fitbit-rate-limit-limit",
    "fitbit-rate-limit-remaining",
    "fitbit-rate-limit-reset",
)


@dataclass(frozen=True)
class RateLimitInfo:
    """Values of the ``fitbit-rate-limit-*`` response headers, when present."""

    limit: Optional[str] = None
    remaining: Optional[str] = None
    reset_epoch: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitInfo":
        found = _rate_limit_headers(headers)
        return cls(
            limit=found.get("fitbit-rate-limit-limit"),
            remaining=found.get("fitbit-rate-limit-remaining"),
            reset_epoch=found.get("fitbit-rate-limit-reset"),
        )


class Outcome(Enum):
    """Successful shapes a status code can map to."""

    JSON = "json"
    CREATED = "created"
    NO_CONTENT = "no_content"


Classification = Union[Outcome, Type[FitbitHTTPError]]


def classify_status(status: int) -> Classification:
    """Map a status code to a success outcome or the error class to raise.

    Checked in order; the first matching case wins.
    """
    if status == 200:
        return Outcome.JSON
    if status == 201:
        return Outcome.CREATED
    if status == 204:
        return Outcome.NO_CONTENT
    if status == 400:
        return BadRequestError
    if status == 401:
        return UnauthorizedError
    if status == 403:
        return ForbiddenError
    if status == 404:
        return NotFoundError
    if status == 429:
        return ApiLimitError
    if 500 <= status <= 599:
        return ServerError
    return UnexpectedStatusError


def interpret(response: requests.Response) -> Optional[Dict[str, Any]]:
    """Return the decoded result for ``response`` or raise its typed error.

    * 200: JSON body (lists wrapped as ``{"body": [...]}``) plus any
      rate-limit headers as top-level keys.
    * 201: ``{}``; 204: ``None``. Neither body is read.
    * Anything else raises a :class:`~fitbit_rest.errors.FitbitHTTPError`
      subclass. The error payload is not parsed.

    A malformed 200 body raises the JSON decoder's own
    ``json.JSONDecodeError``; a 200 body that is neither an object nor an
    array raises ``TypeError``.
    """
    status = response.status_code
    outcome = classify_status(status)

    if outcome is Outcome.JSON:
        return _decode_success(response)
    if outcome is Outcome.CREATED:
        return {}
    if outcome is Outcome.NO_CONTENT:
        return None

    if outcome is ApiLimitError:
        rate_limit = RateLimitInfo.from_headers(response.headers)
        logger.warning(
            "fitbit_rate_limited",
            url=getattr(response, "url", None),
            remaining=rate_limit.remaining,
            reset_in=_reset_hhmmss(rate_limit.reset_epoch),
        )
        raise ApiLimitError(status, rate_limit=rate_limit)

    logger.info(
        "fitbit_error_status",
        url=getattr(response, "url", None),
        status=status,
        error=outcome.__name__,
    )
    raise outcome(status)


def _decode_success(response: requests.Response) -> Dict[str, Any]:
    # json.loads rather than response.json(): requests re-raises decode
    # failures as a RequestException subclass.
    parsed = json.loads(response.text)
    if isinstance(parsed, list):
        result: Dict[str, Any] = {"body": parsed}
    elif isinstance(parsed, dict):
        result = parsed
    else:
        raise TypeError(
            "Expected a JSON object or array in the response body, "
            f"got {type(parsed).__name__}"
        )
    result.update(_rate_limit_headers(response.headers))
    return result


def _rate_limit_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Pick the rate-limit headers out of ``headers``, keyed in lower case."""
    return {
        name.lower(): value
        for name, value in headers.items()
        if name.lower() in RATE_LIMIT_HEADERS
    }


def _reset_hhmmss(seconds: Optional[str]) -> Optional[str]:
    if seconds is None:
        return None
    try:
        return _human_readable_duration(float(seconds))
    except ValueError:
        return None


def _human_readable_duration(seconds: float) -> str:
    """Return a zero-padded HH:MM:SS string for the provided seconds value."""
    total_seconds = max(0, int(math.ceil(seconds)))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
