"""Builds authenticated requests and sends them through the connection."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

import requests
import structlog

from .connection import Connection

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
# Verbs whose params travel in the request body; the rest carry them in the path.
_BODY_VERBS = frozenset({"POST", "PUT"})


class RequestDispatcher:
    """Sends exactly one request per :meth:`execute` call.

    Transport failures (``requests.ConnectionError``, ``requests.Timeout``,
    ``requests.exceptions.SSLError``) are not caught here.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def build_headers(self, *, bearer: bool = True) -> Dict[str, str]:
        config = self.connection.config
        headers = {"Content-Type": FORM_CONTENT_TYPE}
        if bearer:
            headers["Authorization"] = f"Bearer {config.access_token}"
        if config.unit_system is not None:
            headers["Accept-Language"] = config.unit_system
        return headers

    def execute(
        self,
        verb: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        auth: Optional[Tuple[str, str]] = None,
    ) -> requests.Response:
        """Send ``verb`` to the version-qualified ``path`` and return the raw response.

        ``auth`` switches the request from bearer to HTTP Basic authentication,
        which the ``oauth2/*`` endpoints require.
        """
        method = verb.upper()
        url = self.connection.url_for(path)
        data = dict(params or {}) if method in _BODY_VERBS else None

        logger.debug("fitbit_request", method=method, url=url)
        response = self.connection.session.request(
            method,
            url,
            data=data,
            headers=self.build_headers(bearer=auth is None),
            auth=auth,
        )
        logger.debug(
            "fitbit_response", method=method, url=url, status=response.status_code
        )
        return response
