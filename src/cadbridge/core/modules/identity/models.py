from datetime import datetime
from typing import Protocol

from pydantic import BaseModel, Field

from cadbridge.utils import now


class IdentityLookup(Protocol):
    """State lookup keyed by Discord id, consulted by the plain cookie variant."""

    def has_user(self, discord_id: str) -> bool: ...


class DiscordUser(BaseModel):
    """Discord account that has completed OAuth login at least once."""

    discord_id: str
    username: str | None = None
    created_at: datetime = Field(default_factory=now)
    last_login: datetime = Field(default_factory=now)


class DiscordUserView(BaseModel):
    """Discord account information (API representation)."""

    discord_id: str = Field(..., description="Discord user ID")
    username: str | None = Field(None, description="Discord username, if known")

    @classmethod
    def from_domain(cls, user: DiscordUser) -> "DiscordUserView":
        """Create view model from domain model."""
        return cls(discord_id=user.discord_id, username=user.username)
