"""Pydantic v2 response schemas for hotel and room endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class HotelResponse(BaseModel):
    """Public hotel information embedded in room responses."""

    id: uuid.UUID
    name: str
    address: str
    contact: str | None = None
    city: str

    model_config = ConfigDict(from_attributes=True)


class RoomResponse(BaseModel):
    """A room together with the hotel offering it."""

    id: uuid.UUID
    hotel_id: uuid.UUID
    room_type: str
    price_per_night: Decimal
    amenities: list[str] = []
    images: list[str] = []
    is_available: bool
    created_at: datetime
    hotel: HotelResponse

    model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
    """Search results."""

    items: list[RoomResponse]
    total: int
