"""
Per-connection reminder watcher.

Owns the due-reminder state and both timers (due-check poll and alert tone)
for one user. Clients talk to it with messages; a "close" message, or close(),
tears both timers down.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Tuple

from sqlalchemy.orm import Session

from app.utils.timezone import Clock, now_local, utc_now
from .config import settings, ReminderSettings
from .dismissal import dismiss_reminder
from .metrics import reminder_poll_scans_total, reminders_due_total
from .notifier import AlertNotifier, default_tone
from .poller import current_time_key, find_due_reminder
from .repository import get_user_timezone, list_reminders
from .schemas import AlertTone, DismissalResult, ReminderRead

logger = logging.getLogger(__name__)

EventSink = Callable[[Dict[str, Any]], Awaitable[None]]


class ReminderWatcher:
    def __init__(
        self,
        user_id: int,
        session_factory: Callable[[], Session],
        send: EventSink,
        *,
        clock: Clock = utc_now,
        config: ReminderSettings = settings,
    ):
        self.user_id = user_id
        self._session_factory = session_factory
        self._send = send
        self._clock = clock
        self._config = config
        self.due: Optional[ReminderRead] = None
        # (reminder_id, "HH:MM") pairs dismissed during the current minute
        self._dismissed: Set[Tuple[str, str]] = set()
        self._poll_task: Optional[asyncio.Task] = None
        self._notifier = AlertNotifier(
            self._emit_alert,
            interval_seconds=config.ALERT_INTERVAL_SECONDS,
            tone=default_tone(config),
        )
        self.closed = False

    @property
    def alerting(self) -> bool:
        return self._notifier.running

    def start(self) -> None:
        if self._poll_task is not None or self.closed:
            return
        self._poll_task = asyncio.create_task(self._poll_loop(), name=f"reminder-poll-{self.user_id}")

    async def _poll_loop(self) -> None:
        # Check once immediately, then every interval
        while True:
            try:
                await self.check_now()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"Reminder due-check failed for user {self.user_id}: {e}")
            await asyncio.sleep(self._config.POLL_INTERVAL_SECONDS)

    def _load(self) -> Tuple[list, Optional[str]]:
        db = self._session_factory()
        try:
            return list_reminders(db, self.user_id), get_user_timezone(db, self.user_id)
        finally:
            db.close()

    async def check_now(self) -> Optional[ReminderRead]:
        """Run one due-check scan. Returns the due reminder, if any."""
        reminder_poll_scans_total.inc()
        reminders, tz_name = await asyncio.to_thread(self._load)

        if self.due is not None:
            if any(str(r.id) == self.due.id for r in reminders):
                # Already showing one; further matches wait for dismissal
                return self.due
            await self._clear_stale_due()
            return None

        time_key = current_time_key(now_local(tz_name, self._clock))
        self._dismissed = {entry for entry in self._dismissed if entry[1] == time_key}

        match = find_due_reminder(reminders, time_key, skip=self._dismissed)
        if match is None:
            return None

        due = self.due = ReminderRead.from_model(match)
        reminders_due_total.inc()
        logger.info(f"Reminder due | user={self.user_id} reminder={due.id} time={time_key}")
        await self._send({"event": "reminder_due", "reminder": due.model_dump(mode="json")})
        if self.due is not due or self.closed:
            # Acknowledged or closed while the event was in flight
            return self.due
        self._notifier.start()
        return due

    async def _clear_stale_due(self) -> None:
        """The due reminder was dismissed elsewhere (HTTP or another connection)."""
        stale, self.due = self.due, None
        self._dismissed.add((stale.id, stale.time))
        await self._notifier.stop()
        logger.info(f"Due reminder removed elsewhere | user={self.user_id} reminder={stale.id}")
        await self._send({"event": "reminder_cleared", "reminder_id": stale.id})

    async def _emit_alert(self, tone: AlertTone) -> bool:
        if self.due is None:
            return False
        await self._send({"event": "alert", "reminder_id": self.due.id, "tone": tone.model_dump()})
        return True

    async def acknowledge(self) -> Optional[DismissalResult]:
        """Dismiss the due reminder, if any. Alerts stop before any write happens."""
        if self.due is None:
            return None
        dismissed, self.due = self.due, None
        await self._notifier.stop()
        self._dismissed.add((dismissed.id, dismissed.time))

        result = await asyncio.to_thread(dismiss_reminder, self._session_factory, self.user_id, dismissed)
        await self._send({"event": "reminder_dismissed", **result.model_dump()})
        return result

    async def handle_message(self, message: Dict[str, Any]) -> bool:
        """
        Apply a client message. Returns False once the watcher is closed.

        Messages: {"type": "acknowledge"}, {"type": "check"}, {"type": "close"}.
        """
        kind = message.get("type")
        if kind == "acknowledge":
            await self.acknowledge()
        elif kind == "check":
            try:
                await self.check_now()
            except Exception as e:
                logger.exception(f"Reminder due-check failed for user {self.user_id}: {e}")
                await self._send({"event": "error", "message": "Reminder check failed"})
        elif kind == "close":
            await self.close()
        else:
            await self._send({"event": "error", "message": f"Unknown message type: {kind!r}"})
        return not self.closed

    async def close(self) -> None:
        self.closed = True
        task, self._poll_task = self._poll_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self._notifier.stop()
