"""Session management models."""

from pydantic import BaseModel, Field

from cadbridge.core.modules.identity.models import DiscordUser


class IssuedSession(BaseModel):
    """A freshly issued session cookie, ready to hand to the transport layer."""

    cookie_value: str
    discord_id: str
    expires_at: int = Field(..., description="Expiry in milliseconds since epoch")


class SessionPrincipal(BaseModel):
    """Identity behind an authenticated request.

    `user` is None when a signed cookie outlives the in-memory identity
    directory (e.g. after a restart).
    """

    discord_id: str
    user: DiscordUser | None = None
    expires_at: int
    time_remaining: int
    needs_refresh: bool
