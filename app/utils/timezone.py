import logging
from datetime import datetime, timezone as dt_timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(dt_timezone.utc)


def get_zoneinfo(tz_name: Optional[str] = None) -> ZoneInfo:
    """
    Resolve a timezone name, falling back to settings.DEFAULT_TIMEZONE and then UTC.
    """
    for name in (tz_name, settings.DEFAULT_TIMEZONE):
        if not name:
            continue
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {name!r}, falling back")
    return ZoneInfo("UTC")


def now_local(tz_name: Optional[str] = None, clock: Clock = utc_now) -> datetime:
    """Current time in the given timezone (or the server default)."""
    now = clock()
    if now.tzinfo is None:
        # Naive clock values are assumed UTC
        now = now.replace(tzinfo=dt_timezone.utc)
    return now.astimezone(get_zoneinfo(tz_name))


def is_valid_timezone(tz_name: str) -> bool:
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
