import asyncio

import pytest

from app.models.refill import RefillItem
from app.reminders.config import ReminderSettings
from app.reminders.models import Reminder
from app.reminders.repository import create_reminder, list_reminders
from app.reminders.schemas import ReminderCreate
from app.reminders.watcher import ReminderWatcher

FAST = ReminderSettings(POLL_INTERVAL_SECONDS=0.02, ALERT_INTERVAL_SECONDS=0.01)


def _remind(db, user, name="Aspirin", time="09:00", quantity="1"):
    return create_reminder(db, user.id, ReminderCreate(medicine_name=name, time=time, quantity=quantity))


def _events(sent, kind):
    return [e for e in sent if e["event"] == kind]


def _watcher(user, session_factory, clock, sent):
    async def send(event):
        sent.append(event)

    return ReminderWatcher(user.id, session_factory, send, clock=clock, config=FAST)


def test_due_reminder_starts_alert_and_acknowledge_stops_it(session_factory, db, user, clock):
    db.add(RefillItem(user_id=user.id, name="Aspirin", total_quantity=30, remaining_quantity=10))
    db.commit()
    reminder = _remind(db, user)
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        due = await watcher.check_now()
        assert due.id == reminder.id
        assert watcher.alerting
        await asyncio.sleep(0.05)

        result = await watcher.acknowledge()
        assert not watcher.alerting
        assert watcher.due is None
        alerts = len(_events(sent, "alert"))
        await asyncio.sleep(0.03)
        assert len(_events(sent, "alert")) == alerts
        await watcher.close()
        return result

    result = asyncio.run(scenario())

    assert result.inventory_updated and result.reminder_deleted
    assert result.remaining_quantity == 9
    assert _events(sent, "reminder_due")[0]["reminder"]["medicine_name"] == "Aspirin"
    assert len(_events(sent, "alert")) >= 2
    assert _events(sent, "alert")[0]["tone"]["frequency_hz"] == 800
    dismissed = _events(sent, "reminder_dismissed")[0]
    assert dismissed["reminder_id"] == reminder.id
    with session_factory() as s:
        assert list_reminders(s, user.id) == []


def test_no_reminder_when_clock_does_not_match(session_factory, db, user, clock):
    _remind(db, user, time="09:01")
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        assert await watcher.check_now() is None
        assert not watcher.alerting
        await watcher.close()

    asyncio.run(scenario())
    assert sent == []


def test_one_due_reminder_at_a_time(session_factory, db, user, clock):
    first = _remind(db, user, name="Aspirin")
    second = _remind(db, user, name="Metformin")
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        assert (await watcher.check_now()).id == first.id
        # still showing the first one
        assert (await watcher.check_now()).id == first.id
        assert len(_events(sent, "reminder_due")) == 1
        await watcher.acknowledge()
        assert (await watcher.check_now()).id == second.id
        await watcher.close()

    asyncio.run(scenario())
    assert len(_events(sent, "reminder_due")) == 2


def test_dismissed_reminder_does_not_refire_in_same_minute(session_factory, db, user, clock, monkeypatch):
    from app.reminders import dismissal

    reminder = _remind(db, user)

    def offline(*args, **kwargs):
        raise RuntimeError("offline")

    monkeypatch.setattr(dismissal, "delete_reminder", offline)
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        await watcher.check_now()
        result = await watcher.acknowledge()
        assert not result.reminder_deleted
        assert await watcher.check_now() is None
        clock.set_time(9, 1)
        assert await watcher.check_now() is None
        # same minute on a later day: the surviving reminder fires again
        clock.now = clock.now.replace(day=2, hour=9, minute=0)
        assert (await watcher.check_now()).id == reminder.id
        await watcher.close()

    asyncio.run(scenario())


def test_profile_timezone_drives_due_check(session_factory, db, user, clock):
    user.profile.timezone = "Asia/Kolkata"
    db.commit()
    reminder = _remind(db, user, time="14:30")
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        # 09:00 UTC is 14:30 in Kolkata
        assert (await watcher.check_now()).id == reminder.id
        await watcher.close()

    asyncio.run(scenario())


def test_poll_loop_checks_immediately(session_factory, db, user, clock):
    _remind(db, user)
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        watcher.start()
        await asyncio.sleep(0.01)
        assert watcher.due is not None
        await watcher.close()

    asyncio.run(scenario())
    assert len(_events(sent, "reminder_due")) == 1


def test_poll_loop_picks_up_reminder_on_later_scan(session_factory, db, user, clock):
    _remind(db, user, time="09:01")
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        watcher.start()
        await asyncio.sleep(0.01)
        assert watcher.due is None
        clock.set_time(9, 1)
        await asyncio.sleep(0.05)
        assert watcher.due is not None
        await watcher.close()

    asyncio.run(scenario())


def test_close_message_tears_down_timers(session_factory, db, user, clock):
    _remind(db, user)
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        watcher.start()
        await asyncio.sleep(0.01)
        assert watcher.alerting
        keep_open = await watcher.handle_message({"type": "close"})
        assert keep_open is False
        assert watcher.closed
        assert not watcher.alerting
        count = len(sent)
        await asyncio.sleep(0.05)
        assert len(sent) == count

    asyncio.run(scenario())


@pytest.mark.parametrize("message", [{"type": "snooze"}, {}])
def test_unknown_message_reports_error(session_factory, user, clock, message):
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        assert await watcher.handle_message(message) is True
        await watcher.close()

    asyncio.run(scenario())
    assert sent[0]["event"] == "error"


def test_acknowledge_without_due_reminder_is_noop(session_factory, user, clock):
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        assert await watcher.handle_message({"type": "acknowledge"}) is True
        await watcher.close()

    asyncio.run(scenario())
    assert sent == []


def test_acknowledge_while_due_event_in_flight(session_factory, db, user, clock):
    _remind(db, user)
    sent = []

    async def scenario():
        arrived = asyncio.Event()
        release = asyncio.Event()

        async def slow_send(event):
            sent.append(event)
            if event["event"] == "reminder_due":
                arrived.set()
                await release.wait()

        watcher = ReminderWatcher(user.id, session_factory, slow_send, clock=clock, config=FAST)
        check = asyncio.create_task(watcher.check_now())
        await arrived.wait()
        await watcher.acknowledge()
        release.set()
        assert await check is None
        await asyncio.sleep(0.05)
        assert watcher.due is None
        assert not watcher.alerting
        await watcher.close()

    asyncio.run(scenario())
    assert _events(sent, "alert") == []
    assert len(_events(sent, "reminder_dismissed")) == 1


def test_due_reminder_dismissed_elsewhere_is_cleared(session_factory, db, user, clock):
    db.add(RefillItem(user_id=user.id, name="Aspirin", total_quantity=30, remaining_quantity=10))
    db.commit()
    reminder = _remind(db, user)
    sent = []

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        await watcher.check_now()
        assert watcher.alerting

        # acknowledged over HTTP or from another connection
        with session_factory() as s:
            s.delete(s.get(Reminder, reminder.id))
            s.commit()

        assert await watcher.check_now() is None
        assert watcher.due is None
        assert not watcher.alerting
        assert await watcher.acknowledge() is None
        await watcher.close()

    asyncio.run(scenario())
    assert _events(sent, "reminder_cleared") == [{"event": "reminder_cleared", "reminder_id": reminder.id}]
    with session_factory() as s:
        assert s.query(RefillItem).one().remaining_quantity == 10


def test_failed_check_message_reports_error(session_factory, user, clock):
    sent = []

    def broken_load():
        raise RuntimeError("database unavailable")

    async def scenario():
        watcher = _watcher(user, session_factory, clock, sent)
        watcher._load = broken_load
        assert await watcher.handle_message({"type": "check"}) is True
        assert not watcher.closed
        await watcher.close()

    asyncio.run(scenario())
    assert sent == [{"event": "error", "message": "Reminder check failed"}]
