"""Errors raised by the Tidal catalog client."""

from __future__ import annotations


class TidalError(Exception):
    """Base class for all errors of the Tidal catalog client."""

    error_code = 0


class LoginFailed(TidalError):
    """Error raised when the credentials can not be (re)established."""

    error_code = 1


class InvalidDataError(TidalError):
    """Error raised when the API returned data we can not handle."""

    error_code = 2


class HTTPStatusError(TidalError):
    """Base for errors derived from an HTTP error response."""

    error_code = 3

    def __init__(self, message: str, status: int | None = None) -> None:
        """Initialize the error with the upstream message and HTTP status."""
        super().__init__(message)
        self.message = message
        self.status = status


class ResourceNotFoundError(HTTPStatusError):
    """Error raised when the requested resource does not exist (HTTP 404)."""

    error_code = 4


class APIError(HTTPStatusError):
    """Error raised when the API answered with any other HTTP error status."""

    error_code = 5


class RateLimitedError(APIError):
    """Error raised when the rate limit persisted beyond the configured retries."""

    error_code = 6

    def __init__(self, message: str, status: int | None = 429, attempts: int = 0) -> None:
        """Initialize the error with the number of attempts made."""
        super().__init__(message, status)
        self.attempts = attempts


class TokenExpiredError(APIError):
    """Error raised when the token kept expiring after the allowed refresh retries."""

    error_code = 7
