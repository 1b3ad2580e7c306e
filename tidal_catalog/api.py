"""Authenticated client for the Tidal catalog API."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .auth_manager import TidalAuthManager
from .constants import LOGGER_NAME, SESSIONS_ENDPOINT, DeviceType, FilterOptions
from .errors import InvalidDataError, RateLimitedError, ResourceNotFoundError, TokenExpiredError
from .helpers.coordinator import SessionCoordinator
from .helpers.error_classifier import (
    classify_response,
    extract_error_message,
    is_http_error,
    is_token_expired,
)
from .helpers.request_builder import RequestSpec, build_request
from .helpers.throttle_retry import RateLimitBackoff
from .helpers.user_state import UserState
from .models import TidalApiConfig, TidalLyrics, TidalUser

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from .session import TidalSessionProtocol


class TidalApi:
    """Client for the Tidal catalog API.

    All requests go through call, which attaches the credentials of the active
    user, refreshes expired tokens and retries rate limited requests.
    """

    def __init__(
        self,
        http_session: ClientSession,
        session: TidalSessionProtocol,
        config: TidalApiConfig | None = None,
        state: UserState | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the API client."""
        self.http_session = http_session
        self.session = session
        self.config = config or TidalApiConfig()
        self.state = state or UserState()
        self.logger = logger or logging.getLogger(f"{LOGGER_NAME}.api")
        self.coordinator = SessionCoordinator(
            session,
            self.state,
            refresh_debounce=self.config.refresh_debounce,
            logger=self.logger,
        )
        self.backoff = RateLimitBackoff(
            self.config.rate_limit_backoff_min,
            self.config.rate_limit_backoff_max,
            factor=self.config.rate_limit_backoff_factor,
            max_retries=self.config.max_rate_limit_retries,
        )

    @classmethod
    def from_config(
        cls,
        http_session: ClientSession,
        config: TidalApiConfig,
        user: TidalUser | None = None,
        token_updater: Callable[[TidalUser], None] | None = None,
    ) -> TidalApi:
        """Create a client using the OAuth refresh flow of TidalAuthManager."""
        logger = logging.getLogger(LOGGER_NAME)
        auth = TidalAuthManager(http_session, config, token_updater=token_updater, logger=logger)
        return cls(http_session, auth, config, UserState(user), logger)

    @property
    def user(self) -> TidalUser | None:
        """Return the active user."""
        return self.state.user

    def update_user(self, user: TidalUser | None) -> None:
        """Replace the active user, e.g. after a login."""
        self.state.swap(user)

    #
    # CATALOG
    #

    async def get_track(self, track_id: str) -> dict[str, Any]:
        """Get a track."""
        return await self.call(f"tracks/{track_id}")

    async def get_track_lyrics(self, track_id: str) -> TidalLyrics | None:
        """Get the lyrics of a track, None if the track has no lyrics."""
        try:
            result = await self.call(f"tracks/{track_id}/lyrics")
        except ResourceNotFoundError:
            return None
        return TidalLyrics.from_dict(result)

    async def get_album(self, album_id: str) -> dict[str, Any]:
        """Get an album."""
        return await self.call(f"albums/{album_id}")

    async def get_album_tracks(self, album_id: str) -> dict[str, Any]:
        """Get the tracks of an album."""
        return await self.call(f"albums/{album_id}/tracks")

    async def get_artist(self, artist_id: str) -> dict[str, Any]:
        """Get an artist."""
        return await self.call(f"artists/{artist_id}")

    async def get_artist_albums(
        self, artist_id: str, filter_option: FilterOptions = FilterOptions.ALL
    ) -> dict[str, Any]:
        """Get the albums of an artist."""
        return await self.call(
            f"artists/{artist_id}/albums", url_parameters={"filter": filter_option.value}
        )

    async def get_playlist(self, playlist_id: str) -> dict[str, Any]:
        """Get a playlist."""
        return await self.call(f"playlists/{playlist_id}")

    async def get_playlist_tracks(self, playlist_id: str) -> dict[str, Any]:
        """Get the tracks of a playlist."""
        return await self.call(f"playlists/{playlist_id}/tracks")

    async def get_video(self, video_id: str) -> dict[str, Any]:
        """Get a video."""
        return await self.call(f"videos/{video_id}")

    async def get_mix(self, mix_id: str) -> dict[str, Any]:
        """Get the page of a mix, as returned by the API."""
        return await self.call(
            "pages/mix",
            url_parameters={"mixId": mix_id, "deviceType": DeviceType.BROWSER.value},
        )

    async def get_session_info(self) -> dict[str, Any]:
        """Get the session belonging to the credentials of the active user."""
        return await self.call(SESSIONS_ENDPOINT)

    #
    # REQUEST PIPELINE
    #

    async def call(
        self,
        path: str,
        form_parameters: dict[str, str] | None = None,
        url_parameters: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        base_url: str | None = None,
        method: str | None = None,
    ) -> dict[str, Any]:
        """Call the Tidal API and return the JSON object it answered with.

        Form parameters turn the request into a POST. Raises ResourceNotFoundError
        for a 404 and APIError for any other error response.
        """
        rate_limit_retries = 0
        refresh_retries = 0
        while True:
            if path == SESSIONS_ENDPOINT:
                user = self.state.user
            else:
                user = await self.coordinator.await_stable_session(self)

            request = build_request(
                base_url or self.config.base_url,
                path,
                user,
                self.session.item_limit,
                url_parameters=url_parameters,
                headers=headers,
                form_parameters=form_parameters,
                method=method,
            )
            status, body = await self._send(request)

            if status == 429:
                if not self.backoff.can_retry(rate_limit_retries):
                    raise RateLimitedError(
                        f"Rate limit reached for {path}", attempts=rate_limit_retries
                    )
                delay = await self.backoff.wait(rate_limit_retries)
                rate_limit_retries += 1
                self.logger.debug(
                    "Rate limited on %s, retried after %.2f seconds (attempt %d)",
                    path,
                    delay,
                    rate_limit_retries,
                )
                continue

            payload = self._parse_body(body)

            if self._should_refresh(path, status, payload):
                if refresh_retries >= self.config.max_refresh_retries:
                    raise TokenExpiredError(extract_error_message(payload), status)
                refresh_retries += 1
                snapshot = user or self.state.user
                assert snapshot is not None  # checked in _should_refresh
                if await self.coordinator.refresh_token(self, snapshot):
                    self.logger.debug("Retrying %s with refreshed credentials", path)
                    continue

            if is_http_error(status):
                self.logger.debug("Request to %s failed with status %s", path, status)
            return classify_response(status, payload)

    def _should_refresh(self, path: str, status: int, payload: dict[str, Any]) -> bool:
        """Return True if the response asks for a token refresh."""
        if not is_http_error(status):
            return False
        # the session lookup of a running refresh can not refresh again
        if path == SESSIONS_ENDPOINT and self.coordinator.refreshing_in_current_task:
            return False
        active_user = self.state.user
        if active_user is None or not active_user.refresh_token:
            return False
        return is_token_expired(payload)

    async def _send(self, request: RequestSpec) -> tuple[int, str]:
        """Send the request and return the status and body."""
        self.logger.debug(
            "Making %s request to Tidal API: %s%s",
            request.method,
            request.url,
            " (form body)" if request.is_write else "",
        )
        async with self.http_session.request(
            request.method,
            request.url,
            params=request.params,
            headers=request.headers,
            data=request.data,
        ) as response:
            if response.status == 429:
                return response.status, ""
            return response.status, await response.text()

    @staticmethod
    def _parse_body(body: str) -> dict[str, Any]:
        """Parse a response body into a JSON object."""
        if not body.strip():
            return {}
        data = json.loads(body)
        if not isinstance(data, dict):
            raise InvalidDataError(f"Expected a JSON object, got {type(data).__name__}")
        return data
