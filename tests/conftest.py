"""Fixtures shared by the tests."""

import pytest
from fakes import FakeTidalSession

from tidal_catalog.models import TidalApiConfig, TidalUser


@pytest.fixture
def user() -> TidalUser:
    """Return a user with complete session info."""
    return TidalUser(
        access_token="old-token",
        refresh_token="refresh-token",
        session_id="session-0",
        country_code="US",
        user_id="1234",
    )


@pytest.fixture
def tidal_session() -> FakeTidalSession:
    """Return a fake session object."""
    return FakeTidalSession()


@pytest.fixture
def config() -> TidalApiConfig:
    """Return a config with a fast backoff."""
    return TidalApiConfig(
        base_url="https://api.example.com/v1",
        rate_limit_backoff_min=0.001,
        rate_limit_backoff_max=0.002,
    )
