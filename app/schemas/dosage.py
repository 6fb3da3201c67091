from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class DosageBase(BaseModel):
    name: str = Field(..., min_length=1, description="Medicine name")
    quantity: str = Field(..., min_length=1, description="Dosage quantity, e.g. 500 mg")
    time: str = Field(..., min_length=1)


class DosageCreate(DosageBase):
    pass


class DosageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[str] = Field(None, min_length=1)
    time: Optional[str] = Field(None, min_length=1)


class Dosage(DosageBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
