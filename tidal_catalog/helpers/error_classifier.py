"""Classification of Tidal API responses into results or typed errors."""

from __future__ import annotations

import json
from typing import Any

from tidal_catalog.constants import TOKEN_EXPIRED_MESSAGE
from tidal_catalog.errors import APIError, ResourceNotFoundError


def is_http_error(status: int) -> bool:
    """Return True if the status code signals an HTTP error."""
    return status >= 400


def is_token_expired(payload: dict[str, Any]) -> bool:
    """Return True if an error payload tells the access token has expired.

    The API exposes no error code for this, only the human readable message.
    """
    user_message = payload.get("userMessage")
    return isinstance(user_message, str) and TOKEN_EXPIRED_MESSAGE in user_message


def extract_error_message(payload: dict[str, Any]) -> str:
    """Extract the most specific error message from an error payload.

    Precedence: detail of the first entry in `errors`, then `userMessage`,
    then the whole payload as JSON text.
    """
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and first.get("detail") is not None:
            return str(first["detail"])
    user_message = payload.get("userMessage")
    if user_message is not None:
        return str(user_message)
    return json.dumps(payload)


def classify_response(status: int, payload: dict[str, Any]) -> dict[str, Any]:
    """Return the payload of a successful response or raise the matching error."""
    if status == 404:
        raise ResourceNotFoundError(extract_error_message(payload), status)
    if is_http_error(status):
        raise APIError(extract_error_message(payload), status)
    return payload
