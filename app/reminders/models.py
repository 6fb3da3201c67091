"""
Reminder model - one row per daily medication reminder
"""
from datetime import datetime
import uuid
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.db.base import Base


class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    medicine_name = Column(String, nullable=False)
    time = Column(String(5), nullable=False)  # zero-padded "HH:MM"
    reminder_type = Column(String, nullable=False, default="Morning")
    quantity = Column(String, nullable=True)  # free text, e.g. "1", "1/2"
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="reminders")

    __table_args__ = (
        Index("ix_reminders_user_time", "user_id", "time"),
    )
