"""Reading and writing Fitbit OAuth token files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)

UTC = timezone.utc


@dataclass(frozen=True)
class TokenData:
    """OAuth tokens as stored on disk or returned by ``oauth2/token``."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    scope: Optional[List[str]] = None
    token_type: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TokenData":
        expires_at_str = payload.get("expires_at")
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=_parse_timestamp(expires_at_str) if expires_at_str else None,
            scope=_split_scope(payload.get("scope")),
            token_type=payload.get("token_type"),
            user_id=payload.get("user_id"),
        )

    @classmethod
    def from_refresh_payload(
        cls, payload: Mapping[str, Any], *, now: Optional[datetime] = None
    ) -> "TokenData":
        """Build tokens from a refresh response, turning ``expires_in`` into a timestamp."""
        issued_at = now or datetime.now(UTC)
        data = dict(payload)
        expires_in = data.pop("expires_in", None)
        if expires_in:
            data["expires_at"] = (issued_at + timedelta(seconds=int(expires_in))).isoformat()
        return cls.from_dict(data)

    def as_serializable_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"access_token": self.access_token}
        if self.token_type:
            data["token_type"] = self.token_type
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires_at:
            data["expires_at"] = self.expires_at.astimezone(UTC).isoformat()
        if self.scope:
            data["scope"] = " ".join(self.scope)
        if self.user_id:
            data["user_id"] = self.user_id
        return data


def _split_scope(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [part for part in value.split() if part]
    if isinstance(value, Iterable):
        return [str(item) for item in value]
    return None


def _parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def load_token_file(path: str | Path) -> TokenData:
    token_path = Path(path).expanduser()
    with token_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return TokenData.from_dict(payload)


def write_token_file(token: TokenData, path: str | Path) -> Path:
    token_path = Path(path).expanduser()
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with token_path.open("w", encoding="utf-8") as handle:
        json.dump(token.as_serializable_dict(), handle, indent=2)
        handle.write("\n")
    return token_path


def store_refreshed_token(payload: Mapping[str, Any], path: str | Path) -> TokenData:
    """Persist the body of a token refresh response and return the parsed tokens."""
    token = TokenData.from_refresh_payload(payload)
    written = write_token_file(token, path)
    logger.info("token_stored", path=str(written), expires_at=str(token.expires_at))
    return token
