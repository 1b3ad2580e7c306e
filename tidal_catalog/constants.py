"""Constants for the Tidal catalog client."""

from enum import StrEnum

LOGGER_NAME = "tidal_catalog"

# URLs
API_V1_URL = "https://api.tidal.com/v1"
AUTH_URL = "https://auth.tidal.com/v1/oauth2"

TOKEN_TYPE = "Bearer"
OAUTH_SCOPE = "r_usr w_usr w_sub"

# The bootstrap endpoint that populates session metadata.
# Requests to it bypass the refresh gate and session-info resolution.
SESSIONS_ENDPOINT = "sessions"

# Query parameters injected on every request
PARAM_SESSION_ID = "sessionId"
PARAM_COUNTRY_CODE = "countryCode"
PARAM_LIMIT = "limit"

HEADER_AUTHORIZATION = "Authorization"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Upstream text signalling an expired access token
TOKEN_EXPIRED_MESSAGE = "The token has expired."

# DEFAULTS
DEFAULT_ITEM_LIMIT = 100
DEFAULT_REFRESH_DEBOUNCE = 30.0
DEFAULT_BACKOFF_MIN = 0.1
DEFAULT_BACKOFF_MAX = 1.0
DEFAULT_MAX_REFRESH_RETRIES = 2


class FilterOptions(StrEnum):
    """Album filters for the artist albums endpoint."""

    ALL = "ALL"
    EPSANDSINGLES = "EPSANDSINGLES"
    COMPILATIONS = "COMPILATIONS"


class DeviceType(StrEnum):
    """Device types understood by the pages endpoints."""

    BROWSER = "BROWSER"
