"""Data models for the Tidal catalog client."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig

from .constants import (
    API_V1_URL,
    AUTH_URL,
    DEFAULT_BACKOFF_MAX,
    DEFAULT_BACKOFF_MIN,
    DEFAULT_ITEM_LIMIT,
    DEFAULT_MAX_REFRESH_RETRIES,
    DEFAULT_REFRESH_DEBOUNCE,
    TOKEN_TYPE,
)


@dataclass(frozen=True, kw_only=True)
class TidalUser(DataClassDictMixin):
    """Represent an authenticated Tidal user.

    Instances are never mutated: a refresh or a session lookup produces a new
    instance which replaces the active user as a whole.
    """

    access_token: str
    refresh_token: str | None = None
    token_type: str = TOKEN_TYPE
    session_id: str | None = None
    country_code: str | None = None
    user_id: str | None = None
    expires_at: float | None = None

    @property
    def has_session_info(self) -> bool:
        """Return True if both session id and country code are known."""
        return bool(self.session_id) and bool(self.country_code)

    @property
    def authorization(self) -> str:
        """Return the value for the Authorization header."""
        return f"{self.token_type} {self.access_token}"

    def with_changes(self, **changes: str | float | None) -> TidalUser:
        """Return a copy of this user with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]


@dataclass(kw_only=True)
class TidalApiConfig(DataClassDictMixin):
    """Configuration of the API client and its default session."""

    base_url: str = API_V1_URL
    auth_url: str = AUTH_URL
    client_id: str | None = None
    client_secret: str | None = None
    item_limit: int = DEFAULT_ITEM_LIMIT
    # seconds within which a second token refresh is skipped
    refresh_debounce: float = DEFAULT_REFRESH_DEBOUNCE
    # rate limit backoff, in seconds
    rate_limit_backoff_min: float = DEFAULT_BACKOFF_MIN
    rate_limit_backoff_max: float = DEFAULT_BACKOFF_MAX
    rate_limit_backoff_factor: float = 1.0
    # None retries rate limited requests forever
    max_rate_limit_retries: int | None = None
    max_refresh_retries: int = DEFAULT_MAX_REFRESH_RETRIES


@dataclass(kw_only=True)
class TidalLyrics(DataClassDictMixin):
    """Lyrics of a track as returned by the lyrics endpoint."""

    class Config(BaseConfig):
        """Config."""

        serialize_by_alias = True

    track_id: int | None = field(default=None, metadata={"alias": "trackId"})
    lyrics_provider: str | None = field(default=None, metadata={"alias": "lyricsProvider"})
    provider_commontrack_id: str | None = field(
        default=None, metadata={"alias": "providerCommontrackId"}
    )
    provider_lyrics_id: str | None = field(default=None, metadata={"alias": "providerLyricsId"})
    lyrics: str | None = None
    # synced lyrics in LRC format
    subtitles: str | None = None
    is_right_to_left: bool = field(default=False, metadata={"alias": "isRightToLeft"})
