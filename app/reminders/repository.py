from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from .models import Reminder
from .schemas import ReminderCreate
from app.models.refill import RefillItem
from app.models.user_profile import UserProfile


def create_reminder(db: Session, user_id: int, data: ReminderCreate) -> Reminder:
    reminder = Reminder(
        user_id=user_id,
        medicine_name=data.medicine_name,
        time=data.time,
        reminder_type=data.type.value,
        quantity=data.quantity,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def get_reminder(db: Session, user_id: int, reminder_id: str) -> Optional[Reminder]:
    stmt = select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
    return db.execute(stmt).scalars().first()


def list_reminders(db: Session, user_id: int) -> List[Reminder]:
    stmt = (
        select(Reminder)
        .where(Reminder.user_id == user_id)
        .order_by(Reminder.time.asc(), Reminder.created_at.asc())
    )
    return list(db.execute(stmt).scalars())


def delete_reminder(db: Session, user_id: int, reminder_id: str) -> bool:
    result = db.execute(
        delete(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
    )
    db.commit()
    return result.rowcount > 0


def find_refill_item_by_name(db: Session, user_id: int, name: str) -> Optional[RefillItem]:
    """First inventory item whose name matches exactly."""
    stmt = (
        select(RefillItem)
        .where(RefillItem.user_id == user_id, RefillItem.name == name)
        .order_by(RefillItem.created_at.asc())
        .limit(1)
    )
    return db.execute(stmt).scalars().first()


def get_user_timezone(db: Session, user_id: int) -> Optional[str]:
    stmt = select(UserProfile.timezone).where(UserProfile.user_id == user_id)
    return db.execute(stmt).scalar_one_or_none()
