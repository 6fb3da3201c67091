"""
Repeating alert for a due reminder.

The tone itself is rendered by the client; the server emits one alert event
immediately and then every interval until stopped.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .config import settings, ReminderSettings
from .metrics import reminder_alerts_emitted_total
from .schemas import AlertTone

logger = logging.getLogger(__name__)

# Returns False when nothing was played
AlertSink = Callable[[AlertTone], Awaitable[Optional[bool]]]


def default_tone(config: ReminderSettings = settings) -> AlertTone:
    return AlertTone(
        waveform=config.ALERT_TONE_WAVEFORM,
        frequency_hz=config.ALERT_TONE_FREQUENCY_HZ,
        duration_seconds=config.ALERT_TONE_DURATION_SECONDS,
        gain=config.ALERT_TONE_GAIN,
    )


class AlertNotifier:
    """Emits the alert tone on a timer while running."""

    def __init__(
        self,
        emit: AlertSink,
        *,
        interval_seconds: float = settings.ALERT_INTERVAL_SECONDS,
        tone: Optional[AlertTone] = None,
    ):
        self._emit = emit
        self.interval_seconds = interval_seconds
        self.tone = tone or default_tone()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="reminder-alert")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            try:
                if await self._emit(self.tone) is not False:
                    reminder_alerts_emitted_total.inc()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # A failed tone must not end the alert loop
                logger.error(f"Alert playback failed: {e}")
            await asyncio.sleep(self.interval_seconds)
