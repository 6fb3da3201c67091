import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.core.database_utils import get_db_session
from .metrics import reminders_acknowledged_total, refill_decrements_total
from .quantity import parse_quantity
from .repository import delete_reminder, find_refill_item_by_name, get_reminder
from .schemas import DismissalResult, ReminderRead

logger = logging.getLogger(__name__)


def apply_refill_decrement(db: Session, user_id: int, medicine_name: str, quantity: Optional[str]) -> Optional[float]:
    """
    Decrement the inventory item named medicine_name by the parsed dose.

    Returns the new remaining quantity, or None when nothing was changed
    (no matching item, unreadable dose, or not enough stock).
    """
    item = find_refill_item_by_name(db, user_id, medicine_name)
    if item is None:
        return None
    to_decrement = parse_quantity(quantity)
    if to_decrement <= 0 or item.remaining_quantity < to_decrement:
        logger.info(
            f"Refill not decremented | user={user_id} item={item.id} "
            f"remaining={item.remaining_quantity} dose={to_decrement}"
        )
        return None
    item.remaining_quantity = item.remaining_quantity - to_decrement
    db.add(item)
    return item.remaining_quantity


def dismiss_reminder(
    session_factory: Callable[[], Session],
    user_id: int,
    reminder: ReminderRead,
) -> DismissalResult:
    """
    Acknowledge a due reminder: update inventory, then delete the reminder.

    The two writes are independent. Either one failing is logged and reported
    in the result; the reminder delete is attempted whatever the inventory
    outcome.
    """
    result = DismissalResult(reminder_id=reminder.id)

    try:
        with get_db_session(session_factory) as db:
            if get_reminder(db, user_id, reminder.id) is None:
                # Already acknowledged elsewhere; the dose was taken off then
                logger.info(f"Reminder {reminder.id} already dismissed, inventory left unchanged")
                remaining = None
            else:
                remaining = apply_refill_decrement(db, user_id, reminder.medicine_name, reminder.quantity)
        if remaining is not None:
            result.inventory_updated = True
            result.remaining_quantity = remaining
            refill_decrements_total.inc()
    except Exception as e:
        logger.error(f"Failed to update refill item for reminder {reminder.id}: {e}")

    try:
        with get_db_session(session_factory) as db:
            result.reminder_deleted = delete_reminder(db, user_id, reminder.id)
    except Exception as e:
        logger.error(f"Failed to delete reminder {reminder.id}: {e}")

    reminders_acknowledged_total.inc()
    logger.info(
        f"Reminder acknowledged | user={user_id} reminder={reminder.id} "
        f"inventory_updated={result.inventory_updated} deleted={result.reminder_deleted}"
    )
    return result
