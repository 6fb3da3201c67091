from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


class ReminderType(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    NIGHT = "Night"
    CUSTOM = "Custom"


class ReminderCreate(BaseModel):
    medicine_name: str = Field(..., min_length=1)
    time: str = Field(..., pattern=TIME_PATTERN, description="24-hour HH:MM, e.g. 09:00")
    type: ReminderType = ReminderType.MORNING
    quantity: Optional[str] = None

    @field_validator("medicine_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Medicine name is required.")
        return v

    @field_validator("time")
    @classmethod
    def zero_pad_time(cls, v: str) -> str:
        # "9:05" is accepted but stored as "09:05" so it can match the clock
        hours, minutes = v.split(":")
        return f"{int(hours):02d}:{minutes}"


class ReminderRead(BaseModel):
    id: str
    medicine_name: str
    time: str
    type: ReminderType
    quantity: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, reminder) -> "ReminderRead":
        return cls(
            id=str(reminder.id),
            medicine_name=reminder.medicine_name,
            time=reminder.time,
            type=reminder.reminder_type,
            quantity=reminder.quantity,
            created_at=reminder.created_at,
        )


class AlertTone(BaseModel):
    waveform: str
    frequency_hz: float
    duration_seconds: float
    gain: float


class DueReminder(BaseModel):
    due: bool
    current_time: str
    reminder: Optional[ReminderRead] = None


class DismissalResult(BaseModel):
    reminder_id: str
    inventory_updated: bool = False
    remaining_quantity: Optional[float] = None
    reminder_deleted: bool = False
