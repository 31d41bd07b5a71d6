from typing import Self

from pydantic import model_validator
from pydantic_settings import BaseSettings

from cadbridge.core.modules.cookie.models import CookieSettings
from cadbridge.utils import DAY_MS, HOUR_MS


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str
    port: int
    debug: bool
    session_secret_key: str | None = None  # HMAC key for session cookies, required when cookie_signed
    cookie_signed: bool = True  # False selects the plain (unsigned) cookie variant
    cookie_max_age_ms: int = 7 * DAY_MS
    cookie_warning_threshold_ms: int = 12 * HOUR_MS  # Remaining lifetime below which clients should refresh
    cookie_secure: bool = False  # Set the Secure cookie attribute (enable behind HTTPS)
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "CADBRIDGE_",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def check_session_secret(self) -> Self:
        if self.cookie_signed and not self.session_secret_key:
            raise ValueError("session_secret_key is required when cookie_signed is enabled")
        return self

    def cookie_settings(self) -> CookieSettings:
        return CookieSettings(
            secret=self.session_secret_key,
            signed=self.cookie_signed,
            max_age_ms=self.cookie_max_age_ms,
            warning_threshold_ms=self.cookie_warning_threshold_ms,
        )
