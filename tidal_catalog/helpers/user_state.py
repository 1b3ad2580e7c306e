"""Holder of the active Tidal user."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tidal_catalog.models import TidalUser

_UNSET: object = object()


class UserState:
    """Single slot holding the active user.

    The user is an immutable snapshot so readers always see either the old or the
    new value. Writers replace it as a whole through swap.
    """

    def __init__(self, user: TidalUser | None = None) -> None:
        """Initialize the slot with an optional user."""
        self._user = user

    @property
    def user(self) -> TidalUser | None:
        """Return the active user."""
        return self._user

    def swap(self, user: TidalUser | None, expected: object = _UNSET) -> bool:
        """Replace the active user.

        When expected is given the swap only happens if the active user is still that
        exact instance, so a writer holding a stale snapshot never overwrites a newer
        user. Returns whether the slot was updated.
        """
        if expected is not _UNSET and self._user is not expected:
            return False
        self._user = user
        return True
