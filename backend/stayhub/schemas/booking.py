"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking."""

    room_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    guests: int = Field(1, ge=1)

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out_date is strictly after check_in_date."""
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self


class AvailabilityRequest(BaseModel):
    """Body of ``POST /api/v1/bookings/check-availability``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room: uuid.UUID
    check_in_date: date
    check_out_date: date

    @model_validator(mode="after")
    def check_dates(self) -> "AvailabilityRequest":
        if self.check_out_date <= self.check_in_date:
            raise ValueError("checkOutDate must be after checkInDate")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    is_available: bool


class BookingResponse(BaseModel):
    """Standard booking response."""

    id: uuid.UUID
    user_id: str
    room_id: uuid.UUID
    hotel_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    total_price: Decimal
    guests: int
    status: str
    payment_method: str
    is_paid: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingListResponse(BaseModel):
    """List of bookings."""

    items: list[BookingResponse]
    total: int
