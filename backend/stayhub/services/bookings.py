"""Booking creation and lookup shared by the REST and assistant routers."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.booking import Booking
from stayhub.models.room import Room
from stayhub.models.user import User
from stayhub.services.availability import check_availability, compute_total_price, count_nights
from stayhub.services.errors import (
    BookingNotFoundError,
    RoomNotFoundError,
    RoomUnavailableError,
    UserNotFoundError,
)
from stayhub.services.rooms import get_room

logger = logging.getLogger(__name__)


@dataclass
class BookingResult:
    """A freshly created booking together with the records it references."""

    booking: Booking
    room: Room
    user: User
    nights: int


async def create_booking(
    db: AsyncSession,
    user_id: str,
    room_id: uuid.UUID | str,
    check_in: date,
    check_out: date,
    guests: int | None = 1,
) -> BookingResult:
    """Create a pending booking after validating user, dates and availability.

    Raises:
        UserNotFoundError: The user has no local record.
        InvalidStayDatesError: check_out is not after check_in.
        RoomUnavailableError: An existing stay overlaps the requested range.
        RoomNotFoundError: The room does not exist.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError()

    nights = count_nights(check_in, check_out)

    room = await get_room(db, room_id)
    if room is None:
        raise RoomNotFoundError()

    if not await check_availability(db, room.id, check_in, check_out):
        raise RoomUnavailableError()

    booking = Booking(
        user_id=user.id,
        room_id=room.id,
        hotel_id=room.hotel_id,
        check_in_date=check_in,
        check_out_date=check_out,
        guests=guests if guests and guests > 0 else 1,
        total_price=compute_total_price(room.price_per_night, nights),
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    logger.info(
        "Created booking %s for user %s (room=%s, %s → %s, nights=%d, total=%s)",
        booking.id,
        user.id,
        room.id,
        check_in,
        check_out,
        nights,
        booking.total_price,
    )
    return BookingResult(booking=booking, room=room, user=user, nights=nights)


async def get_user_booking(db: AsyncSession, booking_id: uuid.UUID | str, user_id: str) -> Booking:
    """Fetch a booking owned by the user.

    Raises:
        BookingNotFoundError: Unknown id, malformed id, or someone else's booking.
    """
    try:
        parsed = booking_id if isinstance(booking_id, uuid.UUID) else uuid.UUID(str(booking_id))
    except ValueError:
        raise BookingNotFoundError() from None

    result = await db.execute(select(Booking).where(Booking.id == parsed, Booking.user_id == user_id))
    booking = result.scalar_one_or_none()
    if booking is None:
        raise BookingNotFoundError()
    return booking


async def list_user_bookings(db: AsyncSession, user_id: str) -> list[Booking]:
    """Return the user's bookings, newest first."""
    result = await db.execute(
        select(Booking).where(Booking.user_id == user_id).order_by(Booking.created_at.desc())
    )
    return list(result.scalars().all())


async def mark_booking_paid(db: AsyncSession, booking_id: uuid.UUID) -> Booking | None:
    """Record a completed online payment. Returns None for unknown bookings."""
    booking = await db.get(Booking, booking_id)
    if booking is None:
        return None
    if booking.is_paid:
        logger.info("Booking %s already marked as paid", booking_id)
        return booking

    booking.is_paid = True
    booking.payment_method = "Stripe"
    booking.status = "confirmed"
    await db.flush()
    await db.refresh(booking)
    logger.info("Booking %s marked as paid", booking_id)
    return booking
