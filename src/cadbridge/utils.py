import re
import time
from datetime import UTC, datetime

DISCORD_ID_RE = re.compile(r"[0-9]{17,19}")

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS


def is_discord_id(value: object) -> bool:
    """Check that value looks like a Discord snowflake (17-19 digits)."""
    return isinstance(value, str) and bool(DISCORD_ID_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)


def now_ms() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return time.time_ns() // 1_000_000


def ms_to_iso(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, UTC).isoformat()


def format_duration(duration_ms: int) -> str:
    """Format a duration for humans, keeping the two largest units.

    Examples: "2d 4h", "5h 30m", "12m". Non-positive durations are "expired".
    """
    if duration_ms <= 0:
        return "expired"

    days, remainder = divmod(duration_ms, DAY_MS)
    hours, remainder = divmod(remainder, HOUR_MS)
    minutes = remainder // MINUTE_MS

    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
