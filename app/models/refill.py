from datetime import datetime
import uuid
from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.db.base import Base


class RefillItem(Base):
    """Tracked medication inventory for a user"""
    __tablename__ = "refill"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    total_quantity = Column(Float, nullable=False)
    remaining_quantity = Column(Float, nullable=False)  # fractional after "1/2" doses
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="refill_items")

    __table_args__ = (
        Index("ix_refill_user_name", "user_id", "name"),
    )
