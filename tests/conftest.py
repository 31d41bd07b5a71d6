"""Shared pytest fixtures."""

import pytest

from cadbridge.config import Config
from cadbridge.core.modules.cookie.models import CookieSettings
from cadbridge.core.modules.cookie.validator import CookieValidator
from cadbridge.utils import DAY_MS, HOUR_MS

# 2023-11-14T22:13:20Z
START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = START_MS) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def discord_id():
    """A well-formed Discord snowflake."""
    return "123456789012345678"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cookie_settings():
    """Signed settings with a 7 day lifetime and 12 hour warning window."""
    return CookieSettings(secret="test-secret", signed=True, max_age_ms=7 * DAY_MS, warning_threshold_ms=12 * HOUR_MS)


@pytest.fixture
def validator(cookie_settings, clock):
    return CookieValidator(cookie_settings, clock=clock)


@pytest.fixture
def plain_validator(cookie_settings, clock):
    """Validator for the unsigned cookie variant."""
    settings = cookie_settings.model_copy(update={"signed": False, "secret": None})
    return CookieValidator(settings, clock=clock)


@pytest.fixture
def config():
    return Config(
        host="127.0.0.1",
        port=8000,
        debug=True,
        session_secret_key="test-secret",
        _env_file=None,
    )


@pytest.fixture
def plain_config():
    return Config(
        host="127.0.0.1",
        port=8000,
        debug=True,
        cookie_signed=False,
        _env_file=None,
    )
