import structlog

from cadbridge.core.core import Service
from cadbridge.core.modules.identity.models import DiscordUser
from cadbridge.errors import NotFoundError, ValidationError
from cadbridge.utils import is_discord_id, now

logger = structlog.get_logger(__name__)


class IdentityService(Service):
    """In-memory directory of Discord users that have logged in through OAuth.

    Implements IdentityLookup. Contents do not survive a restart, which makes
    plain-variant cookies issued before the restart require re-authentication.
    """

    def __init__(self) -> None:
        super().__init__()
        self._users: dict[str, DiscordUser] = {}

    def has_user(self, discord_id: str) -> bool:
        return discord_id in self._users

    def get_user(self, discord_id: str) -> DiscordUser:
        if discord_id not in self._users:
            raise NotFoundError(f"Discord user '{discord_id}' not found")
        return self._users[discord_id]

    def get_all_users(self) -> list[DiscordUser]:
        return list(self._users.values())

    def register_user(self, discord_id: str, username: str | None = None) -> DiscordUser:
        """Record a successful Discord login, creating the user on first sight."""
        if not is_discord_id(discord_id):
            raise ValidationError(f"Invalid Discord ID: {discord_id!r}")

        existing = self._users.get(discord_id)
        if existing is None:
            user = DiscordUser(discord_id=discord_id, username=username)
            logger.info("discord_user_registered", discord_id=discord_id)
        else:
            user = existing.model_copy(update={"username": username or existing.username, "last_login": now()})
        self._users[discord_id] = user
        return user

    def remove_user(self, discord_id: str) -> None:
        if self._users.pop(discord_id, None) is not None:
            logger.info("discord_user_removed", discord_id=discord_id)

    async def on_stop(self) -> None:
        logger.debug("identity_service_stopped", user_count=len(self._users))
