"""Stay-date arithmetic and room availability checks."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.booking import Booking
from stayhub.services.errors import InvalidStayDatesError


def parse_stay_date(value: str | date | datetime) -> date:
    """Parse a ``YYYY-MM-DD`` string (or ISO datetime) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError):
        raise InvalidStayDatesError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def count_nights(check_in: date, check_out: date) -> int:
    """Return the number of nights between two dates.

    Raises:
        InvalidStayDatesError: If check_out is not strictly after check_in.
    """
    if check_out <= check_in:
        raise InvalidStayDatesError()
    return (check_out - check_in).days


def compute_total_price(price_per_night: Decimal | int | float, nights: int) -> Decimal:
    """Total stay price: nights × nightly rate."""
    return Decimal(str(price_per_night)) * nights


async def check_availability(
    db: AsyncSession,
    room_id: uuid.UUID,
    check_in: date,
    check_out: date,
) -> bool:
    """Return True if no non-cancelled booking for the room overlaps the range.

    Two stays overlap when each starts before the other ends, so a stay
    checking in on another's check-out day is not a conflict.
    """
    query = (
        select(Booking.id)
        .where(
            Booking.room_id == room_id,
            Booking.status != "cancelled",
            Booking.check_in_date < check_out,
            Booking.check_out_date > check_in,
        )
        .limit(1)
    )
    result = await db.execute(query)
    return result.scalar_one_or_none() is None
