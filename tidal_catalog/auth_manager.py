"""Authentication manager for the Tidal catalog client."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError

from .constants import FORM_CONTENT_TYPE, LOGGER_NAME, OAUTH_SCOPE, SESSIONS_ENDPOINT
from .errors import LoginFailed

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from .api import TidalApi
    from .models import TidalApiConfig, TidalUser


class TidalAuthManager:
    """Refresh tokens and look up sessions for the Tidal API.

    Serves as the session object of TidalApi. Refreshed users are handed to the
    optional token_updater so they can be persisted by the application.
    """

    def __init__(
        self,
        http_session: ClientSession,
        config: TidalApiConfig,
        token_updater: Callable[[TidalUser], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize Tidal auth manager."""
        self.http_session = http_session
        self.config = config
        self.update_token = token_updater
        self.logger = logger or logging.getLogger(f"{LOGGER_NAME}.auth")

    @property
    def item_limit(self) -> int:
        """Return the page size sent with every request."""
        return self.config.item_limit

    def _refresh_request_data(self, user: TidalUser) -> dict[str, str]:
        """Return the form data of a refresh token grant."""
        if not user.refresh_token:
            raise LoginFailed("No refresh token available")
        if not self.config.client_id:
            raise LoginFailed("No client id configured")
        data = {
            "refresh_token": user.refresh_token,
            "client_id": self.config.client_id,
            "grant_type": "refresh_token",
            "scope": OAUTH_SCOPE,
        }
        if self.config.client_secret:
            data["client_secret"] = self.config.client_secret
        return data

    async def attempt_token_refresh(self, user: TidalUser) -> TidalUser | None:
        """Refresh the auth token, return the refreshed user or None on failure."""
        try:
            data = self._refresh_request_data(user)
        except LoginFailed as err:
            self.logger.warning("Can not refresh token: %s", err)
            return None

        headers = {"Content-Type": FORM_CONTENT_TYPE}
        try:
            async with self.http_session.post(
                f"{self.config.auth_url}/token", data=data, headers=headers
            ) as response:
                if response.status != 200:
                    self.logger.error("Failed to refresh token: %s", await response.text())
                    return None
                token_data: dict[str, Any] = await response.json()
        except ClientError as err:
            self.logger.error("Failed to refresh token: %s", err)
            return None

        refreshed = self.user_from_token_data(token_data, user)
        if self.update_token is not None:
            self.update_token(refreshed)
        return refreshed

    @staticmethod
    def user_from_token_data(token_data: dict[str, Any], user: TidalUser) -> TidalUser:
        """Return a copy of user with the tokens of a token endpoint response."""
        changes: dict[str, Any] = {"access_token": token_data["access_token"]}
        if token_data.get("refresh_token"):
            changes["refresh_token"] = token_data["refresh_token"]
        if token_data.get("token_type"):
            changes["token_type"] = token_data["token_type"]
        if "expires_in" in token_data:
            changes["expires_at"] = time.time() + token_data["expires_in"]
        user_info = token_data.get("user") or {}
        if user_info.get("countryCode"):
            changes["country_code"] = user_info["countryCode"]
        if token_data.get("user_id") or user_info.get("userId"):
            changes["user_id"] = str(token_data.get("user_id") or user_info.get("userId"))
        return user.with_changes(**changes)

    async def get_session(self, api: TidalApi, user: TidalUser) -> TidalUser:
        """Return the user with the info of its current session."""
        session_info = await api.call(SESSIONS_ENDPOINT)
        changes: dict[str, Any] = {}
        if session_info.get("sessionId"):
            changes["session_id"] = str(session_info["sessionId"])
        if session_info.get("countryCode"):
            changes["country_code"] = str(session_info["countryCode"])
        if session_info.get("userId"):
            changes["user_id"] = str(session_info["userId"])
        if not changes.get("session_id") or not changes.get("country_code"):
            self.logger.warning("Incomplete session info returned for user %s", user.user_id)
        return user.with_changes(**changes)
