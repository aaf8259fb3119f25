"""Immutable client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidArgumentError
from .tokens import load_token_file

FITBIT_API_BASE = "https://api.fitbit.com"
DEFAULT_USER_ID = "-"

_REQUIRED_FIELDS = ("client_id", "client_secret", "access_token")

# Only omitted options are missing; an explicit None is accepted.
_MISSING: Any = object()

# Environment variable -> ClientConfig field.
_ENV_FIELDS = {
    "FB_CLIENT_ID": "client_id",
    "FB_CLIENT_SECRET": "client_secret",
    "FB_ACCESS_TOKEN": "access_token",
    "FB_USER_ID": "user_id",
    "FB_UNIT_SYSTEM": "unit_system",
}


@dataclass(frozen=True)
class ClientConfig:
    """Credentials and per-client defaults shared by every request.

    ``user_id`` defaults to ``"-"``, which the API reads as "the user the
    access token belongs to". ``unit_system`` is sent as ``Accept-Language``
    when set (for example ``en_US``, ``en_GB``, ``metric``).
    """

    client_id: Optional[str] = _MISSING
    client_secret: Optional[str] = _MISSING
    access_token: Optional[str] = _MISSING
    user_id: str = DEFAULT_USER_ID
    unit_system: Optional[str] = None
    base_url: str = FITBIT_API_BASE

    def __post_init__(self) -> None:
        missing = [
            name for name in _REQUIRED_FIELDS if getattr(self, name) is _MISSING
        ]
        if missing:
            raise InvalidArgumentError(
                f"Missing required options: {', '.join(missing)}"
            )
        if self.user_id is None:
            object.__setattr__(self, "user_id", DEFAULT_USER_ID)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any
    ) -> "ClientConfig":
        """Build a config from ``FB_*`` environment variables.

        When ``FB_ACCESS_TOKEN`` is unset the access token is read from the
        token file named by ``FB_TOKENS_FILE`` or ``FB_CLIENT_SECRET_FILE``.
        Keyword arguments take precedence over the environment.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {
            field: env[var] for var, field in _ENV_FIELDS.items() if env.get(var)
        }
        if "access_token" not in values and "access_token" not in overrides:
            token_file = env.get("FB_TOKENS_FILE") or env.get("FB_CLIENT_SECRET_FILE")
            if token_file and Path(token_file).expanduser().exists():
                token = load_token_file(token_file)
                values["access_token"] = token.access_token
                if token.user_id and "user_id" not in values:
                    values["user_id"] = token.user_id
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
