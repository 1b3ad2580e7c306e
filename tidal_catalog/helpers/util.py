"""Various helpers for Tidal API payloads."""

from __future__ import annotations

from typing import Any


def complete_title_from_page(page: dict[str, Any]) -> str:
    """Return the title of an album/track page including its version.

    Some items already carry the version in their title, in which case it is not
    appended a second time.
    """
    title = str(page["title"])
    version = page.get("version")
    if version and version not in title:
        title = f"{title} ({version})"
    return title
