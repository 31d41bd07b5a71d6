from collections.abc import Callable
from typing import Any

from cadbridge.core.modules.cookie.codec import decode_payload, encode_payload, load_signed, make_serializer
from cadbridge.core.modules.cookie.models import (
    CookieError,
    CookieInfo,
    CookieParseResult,
    CookieSettings,
    InvalidCookie,
    ReauthCheck,
    SessionToken,
    ValidCookie,
)
from cadbridge.core.modules.identity.models import IdentityLookup
from cadbridge.errors import ConfigurationError, ValidationError
from cadbridge.utils import format_duration, is_discord_id, ms_to_iso, now_ms

PAYLOAD_KEYS = frozenset({"discordId", "issuedAt", "expiresAt"})
MAX_TIMESTAMP_MS = 253_402_300_799_999  # 9999-12-31T23:59:59.999Z


def _is_timestamp(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_TIMESTAMP_MS


class CookieValidator:
    """Issues and validates session cookies carrying a Discord identity.

    With `settings.signed` the payload is signed with itsdangerous and the
    signature must verify on every parse; without it the cookie is plain
    encoded data and callers are expected to back it with an identity lookup.

    Parsing never raises: every failure is returned as an InvalidCookie.
    """

    def __init__(self, settings: CookieSettings, clock: Callable[[], int] = now_ms) -> None:
        if settings.signed and not settings.secret:
            raise ConfigurationError("A secret key is required for signed session cookies")
        if settings.max_age_ms <= 0:
            raise ConfigurationError("Cookie max age must be positive")
        if settings.warning_threshold_ms < 0:
            raise ConfigurationError("Cookie warning threshold cannot be negative")
        self.settings = settings
        self._clock = clock
        self._serializer = make_serializer(settings.secret) if settings.signed and settings.secret else None

    def issue_token(self, discord_id: str) -> SessionToken:
        """Create a fresh token for an identity already authenticated by Discord.

        Raises:
            ValidationError: If discord_id is not a Discord snowflake
        """
        if not is_discord_id(discord_id):
            raise ValidationError(f"Invalid Discord ID: {discord_id!r}")

        issued_at = self._clock()
        return SessionToken(discord_id=discord_id, issued_at=issued_at, expires_at=issued_at + self.settings.max_age_ms)

    def encode_token(self, token: SessionToken) -> str:
        """Cookie value for a token, signed when the signed variant is configured."""
        if self._serializer is not None:
            return self._serializer.dumps(token.to_payload())
        return encode_payload(token.to_payload())

    def generate_cookie_value(self, discord_id: str) -> str:
        return self.encode_token(self.issue_token(discord_id))

    def parse_cookie(self, value: str | None) -> CookieParseResult:
        """Decode and validate a cookie value from an untrusted client."""
        if not value:
            return InvalidCookie(error=CookieError.MISSING)
        if not isinstance(value, str) or not value.isascii():
            return InvalidCookie(error=CookieError.MALFORMED)

        payload: Any
        try:
            if self._serializer is not None:
                payload, signature_ok = load_signed(self._serializer, value)
            else:
                payload, signature_ok = decode_payload(value), True
        except ValueError:
            return InvalidCookie(error=CookieError.MALFORMED)

        if not isinstance(payload, dict):
            return InvalidCookie(error=CookieError.MALFORMED)
        issued_at = payload.get("issuedAt")
        expires_at = payload.get("expiresAt")
        if (
            not payload.keys() <= PAYLOAD_KEYS
            or not _is_timestamp(issued_at)
            or not _is_timestamp(expires_at)
            or expires_at <= issued_at
        ):
            return InvalidCookie(error=CookieError.MALFORMED)

        if not is_discord_id(payload.get("discordId")):
            return InvalidCookie(error=CookieError.INVALID_IDENTITY)

        # Signature is checked before expiry so a forged expiresAt reports as tampering
        if not signature_ok:
            return InvalidCookie(error=CookieError.SIGNATURE_MISMATCH)

        token = SessionToken.model_validate(payload)
        current = self._clock()
        if current >= token.expires_at:
            return InvalidCookie(error=CookieError.EXPIRED)

        time_remaining = token.expires_at - current
        return ValidCookie(
            discord_id=token.discord_id,
            issued_at=token.issued_at,
            expires_at=token.expires_at,
            time_remaining=time_remaining,
            needs_refresh=time_remaining <= self.settings.warning_threshold_ms,
        )

    def needs_reauth(self, value: str | None) -> ReauthCheck:
        """Hard re-authentication decision for a cookie value.

        Approaching expiry is not a reason to re-authenticate; that is what
        ValidCookie.needs_refresh is for.
        """
        result = self.parse_cookie(value)
        if isinstance(result, InvalidCookie):
            return ReauthCheck(needs_reauth=True, reason=result.error.value)
        return ReauthCheck(needs_reauth=result.time_remaining <= 0)

    def needs_reauth_for_identity(self, discord_id: str | None, directory: IdentityLookup | None = None) -> ReauthCheck:
        """Re-authentication decision when only the identity is known (plain variant)."""
        if not discord_id:
            return ReauthCheck(needs_reauth=True, reason=CookieError.MISSING.value)
        if not is_discord_id(discord_id):
            return ReauthCheck(needs_reauth=True, reason=CookieError.INVALID_IDENTITY.value)
        if directory is not None and not directory.has_user(discord_id):
            return ReauthCheck(needs_reauth=True, reason="user not found")
        return ReauthCheck(needs_reauth=False)

    def get_cookie_info(self, value: str | None) -> CookieInfo:
        result = self.parse_cookie(value)
        if isinstance(result, InvalidCookie):
            return CookieInfo(valid=False, error=result.error)
        return CookieInfo(
            valid=True,
            discord_id=result.discord_id,
            issued_at=ms_to_iso(result.issued_at),
            expires_at=ms_to_iso(result.expires_at),
            time_remaining=result.time_remaining,
            time_remaining_formatted=format_duration(result.time_remaining),
            needs_refresh=result.needs_refresh,
            is_expiring_soon=result.needs_refresh,
        )

    def get_time_until_expiration(self, value: str | None) -> str | None:
        result = self.parse_cookie(value)
        if isinstance(result, InvalidCookie):
            return None
        return format_duration(result.time_remaining)

    def is_valid_and_not_expiring(self, value: str | None) -> bool:
        result = self.parse_cookie(value)
        return isinstance(result, ValidCookie) and not result.needs_refresh
