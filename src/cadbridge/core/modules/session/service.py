import structlog

from cadbridge.core.core import Service
from cadbridge.core.modules.cookie.models import CookieInfo, InvalidCookie, ReauthCheck
from cadbridge.core.modules.session.models import IssuedSession, SessionPrincipal
from cadbridge.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Stateless cookie sessions on top of the cookie validator and identity directory."""

    def start_session(self, discord_id: str, username: str | None = None) -> IssuedSession:
        """Issue a session for a user the Discord OAuth flow has just authenticated."""
        self.core.services.identity.register_user(discord_id, username)
        token = self.core.cookie_validator.issue_token(discord_id)
        logger.info("session_started", discord_id=discord_id, expires_at=token.expires_at)
        return IssuedSession(
            cookie_value=self.core.cookie_validator.encode_token(token),
            discord_id=discord_id,
            expires_at=token.expires_at,
        )

    def authenticate(self, cookie_value: str | None) -> SessionPrincipal:
        """Resolve the request cookie to a principal, raising AuthenticationError otherwise."""
        result = self.core.cookie_validator.parse_cookie(cookie_value)
        if isinstance(result, InvalidCookie):
            logger.debug("session_rejected", reason=result.error.value)
            raise AuthenticationError(reason=result.error.value)

        identity = self.core.services.identity
        known = identity.has_user(result.discord_id)
        # Unsigned cookies can be forged, so the directory is their only backing
        if not self.core.cookie_validator.settings.signed:
            check = self.core.cookie_validator.needs_reauth_for_identity(result.discord_id, identity)
            if check.needs_reauth:
                logger.debug("session_rejected", discord_id=result.discord_id, reason=check.reason)
                raise AuthenticationError(reason=check.reason)

        return SessionPrincipal(
            discord_id=result.discord_id,
            user=identity.get_user(result.discord_id) if known else None,
            expires_at=result.expires_at,
            time_remaining=result.time_remaining,
            needs_refresh=result.needs_refresh,
        )

    def check_reauth(self, cookie_value: str | None) -> ReauthCheck:
        try:
            self.authenticate(cookie_value)
        except AuthenticationError as exc:
            return ReauthCheck(needs_reauth=True, reason=exc.reason)
        return ReauthCheck(needs_reauth=False)

    def refresh_session(self, cookie_value: str | None) -> IssuedSession:
        """Replace a still-valid session with a brand-new cookie.

        Expired or invalid cookies cannot be refreshed; the client must log in again.
        """
        principal = self.authenticate(cookie_value)
        token = self.core.cookie_validator.issue_token(principal.discord_id)
        logger.info("session_refreshed", discord_id=principal.discord_id, expires_at=token.expires_at)
        return IssuedSession(
            cookie_value=self.core.cookie_validator.encode_token(token),
            discord_id=principal.discord_id,
            expires_at=token.expires_at,
        )

    def describe(self, cookie_value: str | None) -> CookieInfo:
        return self.core.cookie_validator.get_cookie_info(cookie_value)

    def end_session(self, cookie_value: str | None) -> None:
        """Log a logout. There is no server-side state to discard."""
        result = self.core.cookie_validator.parse_cookie(cookie_value)
        discord_id = None if isinstance(result, InvalidCookie) else result.discord_id
        logger.info("session_ended", discord_id=discord_id)
