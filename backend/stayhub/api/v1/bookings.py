"""Bookings API router.

A user can only see their own bookings. Availability checks are public so
the room page can show them before sign-in.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import get_current_user, get_db
from stayhub.models.booking import Booking
from stayhub.models.user import User
from stayhub.schemas.booking import (
    AvailabilityRequest,
    AvailabilityResponse,
    BookingCreate,
    BookingListResponse,
    BookingResponse,
)
from stayhub.services.availability import check_availability
from stayhub.services.bookings import create_booking as create_booking_record
from stayhub.services.bookings import list_user_bookings
from stayhub.services.errors import (
    InvalidStayDatesError,
    RoomNotFoundError,
    RoomUnavailableError,
    UserNotFoundError,
)

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post(
    "/check-availability",
    response_model=AvailabilityResponse,
    summary="Check whether a room is free for a date range",
)
async def check_room_availability(
    body: AvailabilityRequest,
    db: AsyncSession = Depends(get_db),
) -> AvailabilityResponse:
    is_available = await check_availability(db, body.room, body.check_in_date, body.check_out_date)
    return AvailabilityResponse(is_available=is_available)


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a room",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Booking:
    """Create a pending booking for the current user.

    Validates that:
    - The room exists.
    - There are no date conflicts with existing non-cancelled bookings.
    """
    try:
        result = await create_booking_record(
            db,
            current_user.id,
            body.room_id,
            body.check_in_date,
            body.check_out_date,
            guests=body.guests,
        )
    except (RoomNotFoundError, UserNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except RoomUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except InvalidStayDatesError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message) from e
    return result.booking


@router.get(
    "/user",
    response_model=BookingListResponse,
    summary="List the current user's bookings",
)
async def list_my_bookings(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    items = await list_user_bookings(db, current_user.id)
    return {"items": items, "total": len(items)}
