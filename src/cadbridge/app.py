from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager

from cadbridge.config import Config
from cadbridge.core.core import Core
from cadbridge.core.modules.cookie.models import CookieInfo, ReauthCheck
from cadbridge.core.modules.identity.models import DiscordUserView
from cadbridge.core.modules.session.models import IssuedSession, SessionPrincipal
from cadbridge.utils import now_ms


class App:
    """Facade for all application operations, authenticates requests before delegating to Core."""

    def __init__(self, config: Config, clock: Callable[[], int] = now_ms) -> None:
        self._core = Core(config, clock=clock)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def start_session(self, discord_id: str, username: str | None = None) -> IssuedSession:
        """Issue a session cookie once Discord OAuth has confirmed the user."""
        return self._core.services.session.start_session(discord_id, username)

    def get_session(self, cookie_value: str | None) -> SessionPrincipal:
        """Authenticate a request by its session cookie."""
        return self._core.services.session.authenticate(cookie_value)

    def check_reauth(self, cookie_value: str | None) -> ReauthCheck:
        return self._core.services.session.check_reauth(cookie_value)

    def refresh_session(self, cookie_value: str | None) -> IssuedSession:
        """Issue a new cookie for a session that is still valid."""
        return self._core.services.session.refresh_session(cookie_value)

    def get_cookie_info(self, cookie_value: str | None) -> CookieInfo:
        return self._core.services.session.describe(cookie_value)

    def logout(self, cookie_value: str | None) -> None:
        self._core.services.session.end_session(cookie_value)

    def get_current_user(self, cookie_value: str | None) -> DiscordUserView:
        """Get the Discord identity behind the request."""
        principal = self.get_session(cookie_value)
        if principal.user is None:
            # Signed cookie from before a restart: identity is intact, profile is not
            return DiscordUserView(discord_id=principal.discord_id)
        return DiscordUserView.from_domain(principal.user)
