from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, HttpUrl, computed_field, model_validator

from app.core.config import settings


def is_low_stock(remaining_quantity: float, total_quantity: float) -> bool:
    if not total_quantity:
        return False
    return remaining_quantity / total_quantity <= settings.LOW_STOCK_THRESHOLD


class RefillItemBase(BaseModel):
    name: str = Field(..., min_length=1, description="Medicine name")
    total_quantity: float = Field(..., ge=1, description="Total quantity must be at least 1.")
    remaining_quantity: float = Field(..., ge=0, description="Remaining quantity cannot be negative.")


class RefillItemCreate(RefillItemBase):
    pass


class RefillItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    total_quantity: Optional[float] = Field(None, ge=1)
    remaining_quantity: Optional[float] = Field(None, ge=0)


class RefillItem(RefillItemBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @computed_field
    @property
    def low_stock(self) -> bool:
        return is_low_stock(self.remaining_quantity, self.total_quantity)


class RefillSuggestionRequest(BaseModel):
    medication: str = Field(..., min_length=1, description="The name of the medication to refill.")
    location: str = Field(..., min_length=1, description="The user's location to find nearby retailers.")


class RefillSuggestion(BaseModel):
    retailer: str = Field(..., description="The suggested online retailer for the refill.")
    url: HttpUrl = Field(..., description="The URL to purchase the medication from the retailer.")
    price: float = Field(..., description="The price of the medication at the retailer.")
    reason: str = Field(..., description="The reason why this retailer was suggested.")

    @model_validator(mode="after")
    def non_negative_price(self) -> "RefillSuggestion":
        if self.price < 0:
            raise ValueError("price cannot be negative")
        return self
