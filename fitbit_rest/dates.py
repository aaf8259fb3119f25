"""Normalize date and time arguments into the API's path formats."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from .errors import InvalidArgumentError, InvalidDateArgument, InvalidTimeArgument

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)


def _today() -> date:
    return date.today()


def _from_semantic(token: str) -> Optional[str]:
    if token == "today":
        return _today().strftime(DATE_FORMAT)
    if token == "yesterday":
        return (_today() - timedelta(days=1)).strftime(DATE_FORMAT)
    return None


def format_date(value: Any) -> Optional[str]:
    """Return ``value`` as ``YYYY-MM-DD``.

    Accepts ``date``/``datetime`` objects, ``"today"``, ``"yesterday"`` and
    strings already in ``YYYY-MM-DD`` form. ``None`` comes back as ``None`` so
    callers can use it to leave a parameter out.
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, str):
        semantic = _from_semantic(value)
        if semantic is not None:
            return semantic
        if _DATE_PATTERN.fullmatch(value):
            return value
    raise InvalidDateArgument(
        "Date used must be a date/time object or a string in the format YYYY-MM-DD; "
        f"supplied argument is a {type(value).__name__}"
    )


def format_time(value: Any) -> str:
    """Return ``value`` as a zero-padded 24-hour ``HH:MM``."""
    if isinstance(value, (datetime, time)):
        return value.strftime(TIME_FORMAT)
    if isinstance(value, str) and _TIME_PATTERN.fullmatch(value):
        return value
    raise InvalidTimeArgument(
        "Time used must be a datetime/time object or a string in the format hh:mm; "
        f"supplied argument is a {type(value).__name__}"
    )


def require_start_date(start_date: Any) -> None:
    if not start_date:
        raise InvalidArgumentError("Please specify a valid start date.")


def require_end_date(end_date: Any) -> None:
    if not end_date:
        raise InvalidArgumentError("Please specify a valid end date.")
