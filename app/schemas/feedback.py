from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class FeedbackCreate(BaseModel):
    email: EmailStr
    message: str = Field(..., min_length=1)


class Feedback(FeedbackCreate):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
