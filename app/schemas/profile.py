from typing import Optional
from pydantic import BaseModel, field_validator

from app.utils.timezone import is_valid_timezone


class ProfileUpdate(BaseModel):
    location: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_timezone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v


class Profile(BaseModel):
    email: str
    location: Optional[str] = None
    timezone: Optional[str] = None

    class Config:
        from_attributes = True
