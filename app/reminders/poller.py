from datetime import datetime
from typing import Iterable, Optional, Set, Tuple

from .models import Reminder


def current_time_key(now: datetime) -> str:
    """Zero-padded 24-hour "HH:MM" for the given local time."""
    return f"{now.hour:02d}:{now.minute:02d}"


def find_due_reminder(
    reminders: Iterable[Reminder],
    time_key: str,
    skip: Optional[Set[Tuple[str, str]]] = None,
) -> Optional[Reminder]:
    """
    Return the first reminder whose time equals time_key exactly.

    Only one reminder is surfaced per scan; later matches wait for the next scan
    after dismissal. Entries in skip are (reminder_id, time) pairs already
    surfaced in this minute.
    """
    skip = skip or set()
    for reminder in reminders:
        if reminder.time != time_key:
            continue
        if (str(reminder.id), reminder.time) in skip:
            continue
        return reminder
    return None
