from fastapi import Response

from cadbridge.app import App
from cadbridge.config import Config
from cadbridge.core.modules.cookie.models import SESSION_COOKIE_NAME
from cadbridge.core.modules.session.models import IssuedSession


def set_session_cookie(response: Response, session: IssuedSession, config: Config) -> None:
    """Attach the session cookie to a response."""
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.cookie_value,
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
        max_age=config.cookie_max_age_ms // 1000,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")


def start_session_cookie(
    response: Response, app: App, config: Config, discord_id: str, username: str | None = None
) -> IssuedSession:
    """Start a session for a user Discord has just authenticated and set its cookie.

    This is the hook for the OAuth callback: once the token exchange has
    produced a Discord user, the callback calls it with that user's id.

    Raises:
        ValidationError: If discord_id is not a Discord snowflake
    """
    session = app.start_session(discord_id, username)
    set_session_cookie(response, session, config)
    return session
