"""Asynchronous client for the Tidal catalog API."""

from .api import TidalApi
from .auth_manager import TidalAuthManager
from .constants import FilterOptions
from .errors import (
    APIError,
    HTTPStatusError,
    InvalidDataError,
    LoginFailed,
    RateLimitedError,
    ResourceNotFoundError,
    TidalError,
    TokenExpiredError,
)
from .helpers.util import complete_title_from_page
from .models import TidalApiConfig, TidalLyrics, TidalUser
from .session import TidalSessionProtocol

__all__ = [
    "APIError",
    "FilterOptions",
    "HTTPStatusError",
    "InvalidDataError",
    "LoginFailed",
    "RateLimitedError",
    "ResourceNotFoundError",
    "TidalApi",
    "TidalApiConfig",
    "TidalAuthManager",
    "TidalError",
    "TidalLyrics",
    "TidalSessionProtocol",
    "TidalUser",
    "complete_title_from_page",
]
