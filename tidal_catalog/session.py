"""Interface of the session object the API client relies on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .api import TidalApi
    from .models import TidalUser


class TidalSessionProtocol(Protocol):
    """Credential and session metadata provider used by TidalApi.

    Implementations never touch the active user themselves; they return new
    TidalUser instances and the API client swaps them in.
    """

    @property
    def item_limit(self) -> int:
        """Return the page size sent with every request."""

    async def attempt_token_refresh(self, user: TidalUser) -> TidalUser | None:
        """Refresh the access token of the user.

        Return the refreshed user, or None if the refresh failed.
        """

    async def get_session(self, api: TidalApi, user: TidalUser) -> TidalUser:
        """Return the user with its session id and country code populated."""
