"""Session cookie models."""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SESSION_COOKIE_NAME = "discord_session"


class CookieSettings(BaseModel):
    """Process-wide cookie configuration, fixed at startup."""

    secret: str | None = None
    signed: bool = True
    max_age_ms: int
    warning_threshold_ms: int

    model_config = ConfigDict(frozen=True)


class CookieError(StrEnum):
    """Reasons a cookie value fails validation."""

    MISSING = "no cookie found"
    MALFORMED = "malformed token"
    INVALID_IDENTITY = "invalid identity format"
    SIGNATURE_MISMATCH = "signature mismatch"
    EXPIRED = "expired"


class SessionToken(BaseModel):
    """Decoded session cookie payload. Tokens are never mutated; refresh issues a new one."""

    discord_id: str = Field(alias="discordId")
    issued_at: int = Field(alias="issuedAt")
    expires_at: int = Field(alias="expiresAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Wire representation, field order fixed: discordId, issuedAt, expiresAt."""
        return self.model_dump(by_alias=True)


class ValidCookie(BaseModel):
    valid: Literal[True] = True
    discord_id: str
    issued_at: int
    expires_at: int
    time_remaining: int = Field(..., description="Milliseconds until expiry")
    needs_refresh: bool = Field(..., description="Token is inside the refresh warning window")


class InvalidCookie(BaseModel):
    valid: Literal[False] = False
    error: CookieError


CookieParseResult = ValidCookie | InvalidCookie


class ReauthCheck(BaseModel):
    """Whether the client must log in through Discord again."""

    needs_reauth: bool
    reason: str | None = None


class CookieInfo(BaseModel):
    """Diagnostic view of a cookie value."""

    valid: bool
    error: CookieError | None = None
    discord_id: str | None = None
    issued_at: str | None = Field(None, description="ISO-8601 issue time")
    expires_at: str | None = Field(None, description="ISO-8601 expiry time")
    time_remaining: int | None = None
    time_remaining_formatted: str | None = Field(None, description="Human readable, e.g. '2d 4h'")
    needs_refresh: bool = False
    is_expiring_soon: bool = False
