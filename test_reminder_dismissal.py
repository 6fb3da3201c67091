import pytest

from app.models.refill import RefillItem
from app.reminders import dismissal
from app.reminders.dismissal import dismiss_reminder
from app.reminders.models import Reminder
from app.reminders.repository import create_reminder, get_reminder
from app.reminders.schemas import ReminderCreate, ReminderRead


def _add_item(db, user, name="Aspirin", total=30, remaining=10):
    item = RefillItem(user_id=user.id, name=name, total_quantity=total, remaining_quantity=remaining)
    db.add(item)
    db.commit()
    return item.id


def _add_reminder(db, user, name="Aspirin", quantity="1"):
    r = create_reminder(db, user.id, ReminderCreate(medicine_name=name, time="09:00", quantity=quantity))
    return ReminderRead.from_model(r)


def _remaining(session_factory, item_id):
    with session_factory() as s:
        return s.get(RefillItem, item_id).remaining_quantity


def test_fractional_dose_decrements_and_deletes(session_factory, db, user):
    item_id = _add_item(db, user, remaining=10)
    reminder = _add_reminder(db, user, quantity="1/2")

    result = dismiss_reminder(session_factory, user.id, reminder)

    assert result.inventory_updated
    assert result.remaining_quantity == pytest.approx(9.5)
    assert result.reminder_deleted
    assert _remaining(session_factory, item_id) == pytest.approx(9.5)
    with session_factory() as s:
        assert get_reminder(s, user.id, reminder.id) is None


def test_insufficient_stock_is_left_alone(session_factory, db, user):
    item_id = _add_item(db, user, remaining=1)
    reminder = _add_reminder(db, user, quantity="2")

    result = dismiss_reminder(session_factory, user.id, reminder)

    assert not result.inventory_updated
    assert result.reminder_deleted
    assert _remaining(session_factory, item_id) == 1


def test_exact_stock_can_reach_zero(session_factory, db, user):
    item_id = _add_item(db, user, remaining=2)
    reminder = _add_reminder(db, user, quantity="2")

    result = dismiss_reminder(session_factory, user.id, reminder)

    assert result.inventory_updated
    assert _remaining(session_factory, item_id) == 0


@pytest.mark.parametrize("quantity", [None, "abc", "0", "-1"])
def test_unusable_dose_does_not_decrement(session_factory, db, user, quantity):
    item_id = _add_item(db, user, remaining=5)
    reminder = _add_reminder(db, user, quantity=quantity)

    result = dismiss_reminder(session_factory, user.id, reminder)

    assert not result.inventory_updated
    assert result.reminder_deleted
    assert _remaining(session_factory, item_id) == 5


def test_name_match_is_exact(session_factory, db, user):
    item_id = _add_item(db, user, name="aspirin", remaining=5)
    reminder = _add_reminder(db, user, name="Aspirin")

    result = dismiss_reminder(session_factory, user.id, reminder)

    assert not result.inventory_updated
    assert _remaining(session_factory, item_id) == 5


def test_inventory_failure_still_deletes(session_factory, db, user, monkeypatch):
    _add_item(db, user)
    reminder = _add_reminder(db, user)

    def boom(*args, **kwargs):
        raise RuntimeError("inventory store unavailable")

    monkeypatch.setattr(dismissal, "apply_refill_decrement", boom)
    result = dismiss_reminder(session_factory, user.id, reminder)

    assert not result.inventory_updated
    assert result.reminder_deleted


def test_delete_failure_keeps_inventory_update(session_factory, db, user, monkeypatch):
    item_id = _add_item(db, user, remaining=10)
    reminder = _add_reminder(db, user)

    def boom(*args, **kwargs):
        raise RuntimeError("delete rejected")

    monkeypatch.setattr(dismissal, "delete_reminder", boom)
    result = dismiss_reminder(session_factory, user.id, reminder)

    assert result.inventory_updated
    assert not result.reminder_deleted
    assert _remaining(session_factory, item_id) == 9
    with session_factory() as s:
        assert s.get(Reminder, reminder.id) is not None


def test_second_dismissal_leaves_inventory_alone(session_factory, db, user):
    item_id = _add_item(db, user, remaining=10)
    reminder = _add_reminder(db, user, quantity="1")

    first = dismiss_reminder(session_factory, user.id, reminder)
    second = dismiss_reminder(session_factory, user.id, reminder)

    assert first.inventory_updated and first.reminder_deleted
    assert not second.inventory_updated
    assert second.remaining_quantity is None
    assert not second.reminder_deleted
    assert _remaining(session_factory, item_id) == 9
