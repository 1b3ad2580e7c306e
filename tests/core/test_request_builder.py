"""Tests for the assembly of API requests."""

from tidal_catalog.helpers.request_builder import build_request, build_url
from tidal_catalog.models import TidalUser


def test_anonymous_request() -> None:
    """Without a user the session parameters are empty and no auth is sent."""
    request = build_request("https://api.tidal.com/v1", "tracks/1", None, 100)
    assert request.method == "GET"
    assert request.url == "https://api.tidal.com/v1/tracks/1"
    assert request.params == {"sessionId": "", "countryCode": "", "limit": "100"}
    assert "Authorization" not in request.headers
    assert request.data is None
    assert not request.is_write


def test_authenticated_request(user: TidalUser) -> None:
    """The session info and the token of the user are attached."""
    request = build_request(
        "https://api.tidal.com/v1",
        "artists/2/albums",
        user,
        50,
        url_parameters={"filter": "ALL"},
    )
    assert request.params == {
        "filter": "ALL",
        "sessionId": "session-0",
        "countryCode": "US",
        "limit": "50",
    }
    assert request.headers["Authorization"] == "Bearer old-token"


def test_missing_session_info_is_empty_string() -> None:
    """A user without session info still sends all session parameters."""
    user = TidalUser(access_token="a")
    request = build_request("https://api.tidal.com/v1", "videos/3", user, 10)
    assert request.params["sessionId"] == ""
    assert request.params["countryCode"] == ""
    assert request.headers["Authorization"] == "Bearer a"


def test_form_parameters_make_a_post(user: TidalUser) -> None:
    """Form parameters turn the request into a form encoded POST."""
    request = build_request(
        "https://api.tidal.com/v1", "playlists/4/items", user, 10, form_parameters={"a": "b"}
    )
    assert request.method == "POST"
    assert request.data == {"a": "b"}
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.is_write


def test_caller_mappings_are_not_modified(user: TidalUser) -> None:
    """The mappings passed in are copied."""
    params = {"mixId": "abc"}
    headers = {"Accept-Language": "en"}
    build_request("https://api.tidal.com/v1", "pages/mix", user, 10, params, headers)
    assert params == {"mixId": "abc"}
    assert headers == {"Accept-Language": "en"}


def test_build_url() -> None:
    """Slashes between base url and path are normalized."""
    url = build_url("https://api.tidal.com/v1/", "/tracks/1")
    assert url == "https://api.tidal.com/v1/tracks/1"
