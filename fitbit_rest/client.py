"""Fitbit Web API client used by the per-resource helpers."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import requests
import structlog

from . import dates
from .config import ClientConfig
from .connection import Connection
from .dispatch import RequestDispatcher
from .interpret import interpret

logger = structlog.get_logger(__name__)

API_VERSION = "1"
API_VERSION_1_2 = "1.2"
TOKEN_PATH = "oauth2/token"
REVOKE_PATH = "oauth2/revoke"


class FitbitClient:
    """Authenticated access to ``https://api.fitbit.com``.

    Paths passed to the ``*_call`` methods are relative to the API version,
    e.g. ``client.get_call("user/-/profile.json")`` requests
    ``/1/user/-/profile.json``. Each call makes one request and either returns
    the decoded result or raises a :class:`~fitbit_rest.errors.FitbitAPIError`.
    """

    format_date = staticmethod(dates.format_date)
    format_time = staticmethod(dates.format_time)
    require_start_date = staticmethod(dates.require_start_date)
    require_end_date = staticmethod(dates.require_end_date)

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[requests.Session] = None,
        **options: Any,
    ) -> None:
        if config is None:
            config = ClientConfig(**options)
        elif options:
            raise TypeError("Pass either a ClientConfig or keyword options, not both")
        self.connection = Connection.create(config, session=session)
        self.dispatcher = RequestDispatcher(self.connection)

    @classmethod
    def from_env(
        cls, *, session: Optional[requests.Session] = None, **overrides: Any
    ) -> "FitbitClient":
        return cls(ClientConfig.from_env(**overrides), session=session)

    @property
    def config(self) -> ClientConfig:
        return self.connection.config

    @property
    def client_id(self) -> str:
        return self.config.client_id

    @property
    def user_id(self) -> str:
        return self.config.user_id

    @property
    def unit_system(self) -> Optional[str]:
        return self.config.unit_system

    def request(
        self, verb: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """Dispatch a version-qualified ``path`` and interpret the response."""
        return interpret(self.dispatcher.execute(verb, path, params))

    def get_call(self, url: str) -> Optional[Dict[str, Any]]:
        return self.request("GET", f"{API_VERSION}/{url}")

    def get_call_1_2(self, url: str) -> Optional[Dict[str, Any]]:
        """GET against API version 1.2 (sleep and a few other resources live there)."""
        return self.request("GET", f"{API_VERSION_1_2}/{url}")

    def post_call(
        self, url: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        return self.request("POST", f"{API_VERSION}/{url}", params)

    def post_call_1_2(
        self, url: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        return self.request("POST", f"{API_VERSION_1_2}/{url}", params)

    def put_call(
        self, url: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        # No resource uses PUT yet.
        return self.request("PUT", f"{API_VERSION}/{url}", params)

    def delete_call(self, url: str) -> Optional[Dict[str, Any]]:
        return self.request("DELETE", f"{API_VERSION}/{url}")

    def refresh_access_token(self, refresh_token: str) -> Optional[Dict[str, Any]]:
        """Exchange ``refresh_token`` for new tokens and return the token payload.

        The client keeps using the access token it was built with; construct a
        new client (or use :func:`fitbit_rest.tokens.store_refreshed_token`)
        with the returned payload.

        The response goes through the same status handling as every other
        call: a rejected refresh raises (usually ``BadRequestError`` or
        ``UnauthorizedError``) instead of returning the error JSON, and a
        successful payload includes any rate-limit header keys.
        """
        logger.info("token_refresh_requested", client_id=self.client_id)
        return self._oauth_call(
            TOKEN_PATH,
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
        )

    def revoke_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Revoke ``token`` (access or refresh).

        Raises the usual :class:`~fitbit_rest.errors.FitbitHTTPError` subclass
        when Fitbit rejects the request rather than returning its error JSON.
        """
        logger.info("token_revoke_requested", client_id=self.client_id)
        return self._oauth_call(REVOKE_PATH, {"token": token})

    def _oauth_call(
        self, path: str, params: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        response = self.dispatcher.execute(
            "POST",
            path,
            params,
            auth=(self.config.client_id, self.config.client_secret),
        )
        return interpret(response)
