"""Tests for the rate limit backoff."""

from unittest.mock import patch

import pytest

from tidal_catalog.helpers.throttle_retry import RateLimitBackoff


def test_delay_stays_within_range() -> None:
    """Delays are drawn from [min, max)."""
    backoff = RateLimitBackoff(0.1, 1.0)
    with patch("tidal_catalog.helpers.throttle_retry.random.random", return_value=0.0):
        assert backoff.delay(0) == pytest.approx(0.1)
    with patch("tidal_catalog.helpers.throttle_retry.random.random", return_value=0.999):
        assert backoff.delay(0) < 1.0
    for attempt in range(50):
        assert 0.1 <= backoff.delay(attempt) < 1.0


def test_escalating_delay() -> None:
    """A factor above one grows the delay with every attempt."""
    backoff = RateLimitBackoff(0.1, 0.1, factor=2.0)
    assert backoff.delay(0) == pytest.approx(0.1)
    assert backoff.delay(3) == pytest.approx(0.8)


def test_retry_bound() -> None:
    """Retries are unbounded unless a maximum is given."""
    assert RateLimitBackoff(0.1, 1.0).can_retry(10_000)
    bounded = RateLimitBackoff(0.1, 1.0, max_retries=2)
    assert bounded.can_retry(1)
    assert not bounded.can_retry(2)


def test_invalid_range() -> None:
    """The maximum may not be below the minimum."""
    with pytest.raises(ValueError):
        RateLimitBackoff(1.0, 0.1)


async def test_wait_sleeps_the_delay() -> None:
    """Wait sleeps for the delay it returns."""
    backoff = RateLimitBackoff(0.001, 0.002)
    delay = await backoff.wait(0)
    assert 0.001 <= delay < 0.002
