"""Assembly of requests to the Tidal API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tidal_catalog.constants import (
    FORM_CONTENT_TYPE,
    HEADER_AUTHORIZATION,
    PARAM_COUNTRY_CODE,
    PARAM_LIMIT,
    PARAM_SESSION_ID,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tidal_catalog.models import TidalUser


@dataclass(kw_only=True)
class RequestSpec:
    """Describe one HTTP request to send."""

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    # form encoded body, only set for write requests
    data: dict[str, str] | None = None

    @property
    def is_write(self) -> bool:
        """Return True if this request carries a form body."""
        return self.data is not None


def build_url(base_url: str, path: str) -> str:
    """Join the base url and the resource path."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def build_request(
    base_url: str,
    path: str,
    user: TidalUser | None,
    item_limit: int,
    url_parameters: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    form_parameters: Mapping[str, str] | None = None,
    method: str | None = None,
) -> RequestSpec:
    """Build the request for a call to the Tidal API.

    The session parameters are always present, as empty strings for an anonymous
    request. The given mappings are copied, never modified.
    """
    params = dict(url_parameters or {})
    params[PARAM_SESSION_ID] = (user.session_id if user else None) or ""
    params[PARAM_COUNTRY_CODE] = (user.country_code if user else None) or ""
    params[PARAM_LIMIT] = str(item_limit)

    request_headers = dict(headers or {})
    if user is not None:
        request_headers[HEADER_AUTHORIZATION] = user.authorization

    data = None
    if form_parameters is not None:
        data = dict(form_parameters)
        request_headers.setdefault("Content-Type", FORM_CONTENT_TYPE)
        method = "POST"

    return RequestSpec(
        method=(method or "GET").upper(),
        url=build_url(base_url, path),
        params=params,
        headers=request_headers,
        data=data,
    )
