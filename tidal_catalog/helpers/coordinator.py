"""Coordination of token refreshes and session info lookups.

Concurrent requests share one active user. This module makes sure that:

- at most one token refresh runs at a time, and a refresh is skipped when another
  one succeeded within the debounce window;
- the session info (session id and country code) of a user is fetched at most
  once concurrently;
- session info is never fetched while a refresh is in progress, as it would be
  fetched with credentials that are about to be replaced.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import TYPE_CHECKING

from tidal_catalog.constants import DEFAULT_REFRESH_DEBOUNCE, LOGGER_NAME

if TYPE_CHECKING:
    from tidal_catalog.api import TidalApi
    from tidal_catalog.models import TidalUser
    from tidal_catalog.session import TidalSessionProtocol

    from .user_state import UserState

# set while the current task runs a refresh and holds the refresh gate
_REFRESHING: ContextVar[bool] = ContextVar("tidal_catalog_refreshing", default=False)


class SessionCoordinator:
    """Serialize token refreshes and session info lookups for one user slot."""

    def __init__(
        self,
        session: TidalSessionProtocol,
        state: UserState,
        refresh_debounce: float = DEFAULT_REFRESH_DEBOUNCE,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the coordinator."""
        self._session = session
        self._state = state
        self._refresh_debounce = refresh_debounce
        self._clock = clock
        self.logger = logger or logging.getLogger(f"{LOGGER_NAME}.coordinator")
        self._refresh_lock = asyncio.Lock()
        self._session_info_lock = asyncio.Lock()
        self._last_refresh: float | None = None

    @property
    def refresh_in_progress(self) -> bool:
        """Return True while a token refresh holds the refresh gate."""
        return self._refresh_lock.locked()

    @property
    def refreshing_in_current_task(self) -> bool:
        """Return True if called from within the refresh run by this task."""
        return _REFRESHING.get()

    @property
    def last_refresh(self) -> float | None:
        """Return the clock value of the last successful refresh."""
        return self._last_refresh

    async def wait_for_refresh(self) -> None:
        """Block until a running token refresh has finished."""
        if self._refresh_lock.locked():
            async with self._refresh_lock:
                pass

    async def await_stable_session(self, api: TidalApi) -> TidalUser | None:
        """Return the active user, ready to be used for a request.

        Waits for a running refresh first, then makes sure the session info of the
        user is known. Returns None when there is no active user.
        """
        await self.wait_for_refresh()
        return await self._ensure_session_info(api)

    async def _ensure_session_info(self, api: TidalApi) -> TidalUser | None:
        """Fetch the session info of the active user if it is missing."""
        user = self._state.user
        if user is None or user.has_session_info:
            return user

        async with self._session_info_lock:
            # another waiter may have fetched it already, or the user changed
            user = self._state.user
            if user is None or user.has_session_info:
                return user

            await self.wait_for_refresh()
            user = self._state.user
            if user is None or user.has_session_info:
                return user

            self.logger.debug("Fetching session info for user %s", user.user_id)
            populated = await self._session.get_session(api, user)
            if not self._state.swap(populated, expected=user):
                self.logger.debug("Active user changed while fetching session info")
                return self._state.user
            return populated

    def _recently_refreshed(self) -> bool:
        """Return True if a refresh succeeded within the debounce window."""
        if self._last_refresh is None:
            return False
        return self._clock() - self._last_refresh < self._refresh_debounce

    async def refresh_token(self, api: TidalApi, user: TidalUser) -> bool:
        """Refresh the token of the active user after it was reported expired.

        The user is the snapshot the failing request was sent with. Returns True if
        the request should be retried with the (possibly already) refreshed
        credentials, False if refreshing failed.
        """
        async with self._refresh_lock:
            if self._recently_refreshed():
                self.logger.debug("Token was refreshed recently, skipping refresh")
                return True

            current = self._state.user
            if current is None:
                return False
            if current.access_token != user.access_token:
                self.logger.debug("Access token already replaced, skipping refresh")
                return True

            reset_token = _REFRESHING.set(True)
            try:
                return await self._refresh(api, current)
            finally:
                _REFRESHING.reset(reset_token)

    async def _refresh(self, api: TidalApi, user: TidalUser) -> bool:
        """Refresh the token of the user and fetch its new session info."""
        self.logger.debug("Refreshing access token for user %s", user.user_id)
        refreshed = await self._session.attempt_token_refresh(user)
        if not refreshed:
            self.logger.warning("Failed to refresh the access token")
            return False

        # recorded before the session lookup, which may raise
        self._last_refresh = self._clock()
        self._state.swap(refreshed)
        populated = await self._session.get_session(api, refreshed)
        self._state.swap(populated, expected=refreshed)
        self.logger.info("Access token refreshed")
        return True
