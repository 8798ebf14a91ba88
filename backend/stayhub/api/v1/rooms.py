"""Public room browsing API router."""

import uuid
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import get_db, get_optional_user
from stayhub.models.user import User
from stayhub.schemas.room import RoomListResponse, RoomResponse
from stayhub.services.rooms import get_room, record_searched_city, search_rooms

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


@router.get(
    "",
    response_model=RoomListResponse,
    summary="Search available rooms",
)
async def list_rooms(
    city: str | None = Query(None, description="Case-insensitive match on the hotel's city"),
    room_type: str | None = Query(None, description="Case-insensitive match on the room type"),
    price_min: Decimal | None = Query(None, ge=0),
    price_max: Decimal | None = Query(None, ge=0),
    amenities: list[str] | None = Query(None, description="Rooms offering any of these"),
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
    user: User | None = Depends(get_optional_user),
) -> RoomListResponse:
    """Return available rooms matching the filters, newest first."""
    rooms = await search_rooms(
        db,
        city=city,
        room_type=room_type,
        price_min=price_min,
        price_max=price_max,
        amenities=amenities,
        limit=limit,
    )
    if user is not None and city:
        await record_searched_city(db, user, city)

    return RoomListResponse(
        items=[RoomResponse.model_validate(r) for r in rooms],
        total=len(rooms),
    )


@router.get(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Get a room with its hotel",
)
async def get_room_detail(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> RoomResponse:
    room = await get_room(db, room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Room not found",
        )
    return RoomResponse.model_validate(room)
