"""Connection manager: configuration plus an HTTP session bound to the API origin."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import requests
import structlog

from .config import ClientConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Connection:
    """Read-only pairing of a :class:`ClientConfig` with a ``requests`` session.

    The session is the transport. ``requests`` form-encodes ``data=`` mappings,
    so POST bodies go out as ``application/x-www-form-urlencoded``. Sharing a
    connection across threads is only as safe as the session passed in.
    """

    config: ClientConfig
    session: requests.Session = field(repr=False)

    @classmethod
    def create(
        cls, config: ClientConfig, *, session: Optional[requests.Session] = None
    ) -> "Connection":
        if not isinstance(config, ClientConfig):
            config = ClientConfig(**config)
        logger.debug(
            "fitbit_connection_created",
            base_url=config.base_url,
            user_id=config.user_id,
            unit_system=config.unit_system,
        )
        return cls(config=config, session=session or requests.Session())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def url_for(self, path: str) -> str:
        """Join ``path`` onto the API origin."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
